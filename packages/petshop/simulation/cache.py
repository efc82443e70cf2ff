"""
On-disk cache for discovered teams and score tables.

Objects are pickled and gzip-compressed; team sets are large but very
repetitive, so they compress well.
"""

from __future__ import annotations

import gzip
import logging
import pickle
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

PICKLE_PROTOCOL = pickle.HIGHEST_PROTOCOL


def write_compressed(obj: Any, path: Union[str, Path]) -> None:
    """Pickle ``obj`` into a gzip file at ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with gzip.open(path, "wb") as f:
        pickle.dump(obj, f, protocol=PICKLE_PROTOCOL)
    logger.info("Saved %s (%d bytes)", path, path.stat().st_size)


def read_compressed(path: Union[str, Path]) -> Optional[Any]:
    """Load an object written by ``write_compressed``, or None if the file is missing."""
    path = Path(path)
    if not path.exists():
        return None
    with gzip.open(path, "rb") as f:
        return pickle.load(f)
