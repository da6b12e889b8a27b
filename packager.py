# packager.py
import os, shutil, zipfile
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
import structlog

from buffers import Buffer, select_buffer
from constants import PART_NAME_TEMPLATE, ZIP_COMPRESSLEVEL
from errors import PartBuildError
from memory import MemoryProbe, available_memory
from scan import SourceFile

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OutputArtifact:
    part_index: int
    path: str


def part_path(out_dir: str, index: int) -> str:
    return os.path.join(out_dir, PART_NAME_TEMPLATE.format(index=index))


def plan_parts(files: Sequence[SourceFile], part_limit_bytes: int) -> List[List[SourceFile]]:
    """
    Greedy, order-preserving grouping. A group is closed as soon as the next
    file would push it over `part_limit_bytes`; a file bigger than the limit
    on its own still gets a group (just by itself).
    """
    parts: List[List[SourceFile]] = []
    bundle: List[SourceFile] = []
    total_in_bundle = 0

    for sf in files:
        if bundle and (total_in_bundle + sf.size_bytes) > part_limit_bytes:
            parts.append(bundle)
            bundle, total_in_bundle = [], 0
        bundle.append(sf); total_in_bundle += sf.size_bytes

    if bundle:
        parts.append(bundle)
    return parts


def build_archive(files: Sequence[SourceFile], buffer: Buffer) -> None:
    """Deflate every file into `buffer` as one zip, entries in input order."""
    # duplicate entry names are left as-is (zipfile only warns);
    # mtimes outside 1980..2107 are clamped instead of failing the part
    with zipfile.ZipFile(buffer.stream, "w", compression=zipfile.ZIP_DEFLATED,
                         compresslevel=ZIP_COMPRESSLEVEL, strict_timestamps=False) as zf:
        for sf in files:
            zf.write(sf.absolute_path, arcname=sf.relative_name)


def write_part(index: int, buffer: Buffer, out_dir: str) -> OutputArtifact:
    """Copy the finished buffer to its numbered file in `out_dir`; always disposes the buffer."""
    dest = part_path(out_dir, index)
    try:
        buffer.rewind()
        try:
            with open(dest, "wb") as out:
                shutil.copyfileobj(buffer.stream, out)
        except Exception:
            # don't leave a truncated part behind
            if os.path.exists(dest):
                os.remove(dest)
            raise
    finally:
        buffer.dispose()
    return OutputArtifact(index, dest)


def create_zip_parts(
    files: Sequence[SourceFile],
    out_dir: str,
    part_limit_bytes: int,
    memory_threshold_bytes: int,
    probe: MemoryProbe = available_memory,
    on_part: Optional[Callable[[OutputArtifact, List[SourceFile], int], None]] = None,
    tmp_dir: Optional[str] = None,
) -> List[OutputArtifact]:
    """
    Plan the parts up front, then build them one at a time: pick a buffer,
    compress the group into it, flush it to `out_dir`, drop it.
    Any I/O failure stops the run as PartBuildError; the current buffer is
    disposed first.
    """
    plan = plan_parts(files, part_limit_bytes)
    log.info("Parts planned.", files=len(files), parts=len(plan), limit=part_limit_bytes)

    artifacts: List[OutputArtifact] = []
    for idx, group in enumerate(plan):
        buf: Optional[Buffer] = None
        try:
            buf = select_buffer(memory_threshold_bytes, probe, tmp_dir)
            build_archive(group, buf)
            staged = buf.size()
            artifact = write_part(idx, buf, out_dir)
        except OSError as e:
            raise PartBuildError(idx, e.strerror or str(e), path=e.filename) from e
        except (zipfile.BadZipFile, ValueError) as e:
            raise PartBuildError(idx, str(e)) from e
        finally:
            if buf is not None:
                buf.dispose()

        artifacts.append(artifact)
        log.info("Part written.", index=idx, path=artifact.path, files=len(group),
                 variant=buf.kind, bytes=staged)
        if on_part:
            on_part(artifact, group, len(plan))
    return artifacts
