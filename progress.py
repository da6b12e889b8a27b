# progress.py
import os, sys
from typing import List, Optional, TextIO

from packager import OutputArtifact
from scan import SourceFile
from utils import human_mb, progress_bar


class ProgressReporter:
    """Console line per finished part, plus a closing summary."""
    def __init__(self, out: Optional[TextIO] = None, quiet: bool = False):
        self.out = out or sys.stdout
        self.quiet = quiet
        self.parts_done = 0
        self.in_bytes = 0
        self.out_bytes = 0
        self.bar_width = 20

    def _print(self, text: str):
        print(text, file=self.out, flush=True)

    def on_part(self, artifact: OutputArtifact, group: List[SourceFile], total_parts: int):
        self.parts_done += 1
        self.in_bytes += sum(sf.size_bytes for sf in group)
        self.out_bytes += os.path.getsize(artifact.path)
        if self.quiet:
            return
        bar = progress_bar(self.parts_done / max(1, total_parts), self.bar_width)
        name = os.path.basename(artifact.path)
        self._print(f"[{self.parts_done}/{total_parts}] {name} {bar} ({len(group)} files, {human_mb(self.in_bytes)} in)")
        self._print(f"Created {artifact.path}")

    def summary(self):
        if not self.parts_done:
            self._print("No files found, nothing to zip.")
        else:
            self._print(f"{self.parts_done} part(s): {human_mb(self.in_bytes)} in, {human_mb(self.out_bytes)} out")
        self._print("Zipping complete.")
