# buffers.py
import io, os, tempfile
from typing import BinaryIO, Optional
import structlog

from constants import TMP_PREFIX, TMP_SUFFIX
from memory import MemoryProbe, available_memory, read_probe

log = structlog.get_logger(__name__)


class Buffer:
    """
    Staging area for one archive part: written sequentially, then rewound
    and read back in full. `stream` is handed to the zip writer directly.
    """
    kind = "buffer"

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.disposed = False

    def write(self, data: bytes) -> None:
        self.stream.write(data)

    def rewind(self) -> None:
        self.stream.flush()
        self.stream.seek(0)

    def read_all(self) -> bytes:
        self.rewind()
        return self.stream.read()

    def size(self) -> int:
        pos = self.stream.tell()
        end = self.stream.seek(0, io.SEEK_END)
        self.stream.seek(pos)
        return end

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        self.stream.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.dispose()
        return False


class MemoryBuffer(Buffer):
    kind = "memory"

    def __init__(self):
        super().__init__(io.BytesIO())


class DiskBuffer(Buffer):
    kind = "disk"

    def __init__(self, tmp_dir: Optional[str] = None):
        fd, self.path = tempfile.mkstemp(prefix=TMP_PREFIX, suffix=TMP_SUFFIX, dir=tmp_dir)
        try:
            stream = os.fdopen(fd, "w+b")
        except Exception:
            os.close(fd)
            _unlink_quiet(self.path)
            raise
        super().__init__(stream)
        log.debug("Temp buffer created.", path=self.path)

    def dispose(self) -> None:
        if self.disposed:
            return
        try:
            super().dispose()
        finally:
            _unlink_quiet(self.path)
            log.debug("Temp buffer removed.", path=self.path)


def _unlink_quiet(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


def select_buffer(memory_threshold_bytes: int, probe: MemoryProbe = available_memory,
                  tmp_dir: Optional[str] = None) -> Buffer:
    """
    Memory-backed buffer when more than `memory_threshold_bytes` are free,
    disk-backed otherwise (including when free memory can't be determined).
    """
    avail = read_probe(probe)
    if avail is not None and avail > memory_threshold_bytes:
        buf: Buffer = MemoryBuffer()
    else:
        buf = DiskBuffer(tmp_dir)
    log.info("Buffer selected.", variant=buf.kind, available=avail, threshold=memory_threshold_bytes)
    return buf
