# memory.py
from typing import Callable, Optional
import psutil
import structlog

log = structlog.get_logger(__name__)

MemoryProbe = Callable[[], Optional[int]]


def available_memory() -> Optional[int]:
    """Best-effort reading of free physical memory in bytes, or None."""
    try:
        return int(psutil.virtual_memory().available)
    except (psutil.Error, OSError, RuntimeError, AttributeError, ValueError) as e:
        log.warning("Available memory query failed.", error=str(e))
        return None


def read_probe(probe: MemoryProbe) -> Optional[int]:
    """Call `probe`, returning None for anything that isn't a usable byte count."""
    try:
        value = probe()
    except Exception as e:
        log.warning("Memory probe raised, treating as unknown.", error=str(e))
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        if value is not None:
            log.warning("Memory probe returned an unusable value.", value=value)
        return None
    return value
