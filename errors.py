# errors.py
from typing import Optional


class ZipPartsError(Exception):
    """Base for every error the tool reports to the user."""


class ConfigError(ZipPartsError):
    """Bad or missing command-line input."""


class PartBuildError(ZipPartsError):
    def __init__(self, part_index: int, reason: str, path: Optional[str] = None):
        self.part_index = part_index
        self.path = path
        where = f" ({path})" if path else ""
        super().__init__(f"Part {part_index:03d} failed{where}: {reason}")
