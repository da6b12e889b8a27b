# utils.py
import os, tempfile, time
from pathlib import Path
from typing import Optional
import structlog

from constants import STALE_TMP_HOURS, TMP_PREFIX

log = structlog.get_logger(__name__)

# ---------- small shared utils ----------
def human_mb(n: Optional[float]) -> str:
    return f"{(n or 0)/1024/1024:.1f} MB"

def clamp(v, lo, hi):
    return max(lo, min(hi, v))

def progress_bar(percent: float, length: int = 20) -> str:
    filled = clamp(int(length * percent), 0, length)
    return "[" + "■" * filled + "□" * (length - filled) + f"] {int(clamp(percent, 0.0, 1.0) * 100):>3d}%"

# ---------- temp hygiene ----------
def clean_stale_tmp(prefix: str = TMP_PREFIX, max_age_hours: float = STALE_TMP_HOURS,
                    tmp_dir: Optional[str] = None) -> int:
    """
    Remove staging files a crashed run left in the temp dir. Best-effort:
    anything that can't be removed is skipped. Returns how many were removed.
    """
    tmp = Path(tmp_dir or tempfile.gettempdir())
    cutoff = time.time() - max_age_hours * 3600
    removed = 0
    try:
        children = list(tmp.iterdir())
    except OSError as e:
        log.warning("Temp dir not readable, skipping cleanup.", path=str(tmp), error=str(e))
        return 0
    for child in children:
        if not child.name.startswith(prefix):
            continue
        try:
            if child.is_file() and child.stat().st_mtime < cutoff:
                child.unlink()
                removed += 1
        except OSError as e:
            log.debug("Stale temp file left in place.", path=str(child), error=str(e))
    if removed:
        log.info("Removed stale temp files.", count=removed, path=str(tmp))
    return removed

def ensure_dir(path: str) -> bool:
    """Create `path` if missing; True when it had to be created."""
    if os.path.isdir(path):
        return False
    os.makedirs(path, exist_ok=True)
    return True
