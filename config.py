# config.py
import argparse
from dataclasses import dataclass
from typing import List, Optional

from constants import DEFAULT_PART_MB, DEFAULT_THRESHOLD_MB, MB, PRESETS
from errors import ConfigError


@dataclass(frozen=True)
class PartBudget:
    max_part_size_bytes: int
    memory_threshold_bytes: int


@dataclass(frozen=True)
class RunConfig:
    input_dir: str
    output_dir: str
    part_mb: int
    threshold_mb: int
    verbose: bool = False
    quiet: bool = False

    @property
    def budget(self) -> PartBudget:
        return PartBudget(self.part_mb * MB, self.threshold_mb * MB)


def apply_preset(part_mb: int, preset: str):
    """-> (part_mb, threshold_mb) after a preset: threshold = capacity, part size clamped to it."""
    cap = PRESETS[preset]
    return min(part_mb, cap), cap


class _PresetAction(argparse.Action):
    # runs in command-line order, so it clamps whatever --partsize was seen so far
    def __init__(self, option_strings, dest, preset: str = "", **kwargs):
        self.preset = preset
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.partsize, namespace.threshold = apply_preset(namespace.partsize, self.preset)


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise ConfigError(message)


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        allow_abbrev=False,
        prog="zipparts",
        description="Split a directory tree into size-bounded zip parts.",
        epilog="Flags apply left to right: a preset clamps the part size given before it; "
               "a later --partsize/--threshold overrides the preset.",
    )
    p.add_argument("--input", metavar="<directory>", help="directory to compress")
    p.add_argument("--output", metavar="<directory>", help="output directory for zip files (created if missing)")
    p.add_argument("--partsize", metavar="<sizeMB>", type=int, default=DEFAULT_PART_MB,
                   help=f"max uncompressed input per part in MB (default {DEFAULT_PART_MB})")
    p.add_argument("--threshold", metavar="<sizeMB>", type=int, default=DEFAULT_THRESHOLD_MB,
                   help=f"free memory in MB needed to build a part in RAM (default {DEFAULT_THRESHOLD_MB})")
    for name, cap in PRESETS.items():
        p.add_argument(f"--{name}", action=_PresetAction, preset=name, dest=f"preset_{name}",
                       default=argparse.SUPPRESS, help=f"size constraints for {name} capacity ({cap}MB)")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    p.add_argument("-q", "--quiet", action="store_true", help="no per-part progress lines")
    return p


def parse_args(argv: Optional[List[str]] = None) -> RunConfig:
    """Raises ConfigError for anything the user needs to fix."""
    ns = build_parser().parse_args(argv)
    if not ns.input or not ns.output:
        raise ConfigError("Input and output directories must be specified.")
    if ns.partsize <= 0:
        raise ConfigError(f"--partsize must be positive, got {ns.partsize}")
    if ns.threshold < 0:
        raise ConfigError(f"--threshold must not be negative, got {ns.threshold}")
    return RunConfig(ns.input, ns.output, ns.partsize, ns.threshold, ns.verbose, ns.quiet)
