"""Local file cache for downloaded suffix lists.

Each remote list is stored as ``<cache_dir>/<basename of url>`` and reused
until it is older than the max-age (72 hours by default).
"""

import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

# Default cache root, relative to the working directory
DEFAULT_CACHE_DIR = Path(".cache") / "suffixes"

# Default max-age in seconds (72 hours)
DEFAULT_MAX_AGE = 72 * 3600


def cache_path(cache_dir: Path, url: str) -> Path:
    """Return the cache file used for *url*."""
    name = Path(urlparse(url).path).name or urlparse(url).netloc.replace(":", "_")
    return Path(cache_dir) / name


def cache_age(path: Path) -> Optional[float]:
    """Age of *path* in seconds, or ``None`` if it does not exist."""
    try:
        return time.time() - path.stat().st_mtime
    except OSError:
        return None


def is_fresh(path: Path, max_age: int = DEFAULT_MAX_AGE) -> bool:
    """True when *path* exists and is younger than *max_age* seconds."""
    age = cache_age(path)
    if age is None:
        logger.debug("Cache miss for %s (file does not exist)", path)
        return False
    if age > max_age:
        logger.info("Cache expired for %s (age %.0fs > max %ds)", path, age, max_age)
        return False
    logger.debug("Cache hit for %s (age %.0fs, max %ds)", path, age, max_age)
    return True


def write_cached(path: Path, text: str) -> bool:
    """Atomically replace *path* with *text*. Returns False on failure."""
    tmp = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
        logger.info("Cached %d bytes → %s", len(text), path)
        return True
    except OSError as exc:
        logger.warning("Failed to write cache %s: %s", path, exc)
        if tmp is not None and os.path.exists(tmp):
            os.unlink(tmp)
        return False
