"""Read program text from disk."""

import logging
from pathlib import Path

from bfcore.errors import LoadError

logger = logging.getLogger(__name__)


def load_program(path) -> str:
    """Return the program text of ``path``, one character per byte.

    Raises LoadError when the file is missing or cannot be read.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise LoadError(path, "no such file") from e
    except IsADirectoryError as e:
        raise LoadError(path, "is a directory") from e
    except OSError as e:
        raise LoadError(path, e.strerror or str(e)) from e

    logger.info("loaded %s (%d bytes)", path, len(raw))
    # latin-1 maps each byte to exactly one character, so text positions
    # are byte offsets.
    return raw.decode("latin-1")
