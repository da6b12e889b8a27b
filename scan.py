# scan.py
import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class SourceFile:
    absolute_path: str
    relative_name: str  # relative to the file's own folder, not the input root
    size_bytes: int


def entry_name(path: str) -> str:
    # flattens nested trees: a/x.txt and b/x.txt both become "x.txt"
    return os.path.relpath(path, os.path.dirname(path))


def list_files(root: str) -> List[SourceFile]:
    """
    Recursively list regular files under `root`. Each folder's own files come
    before its subfolders; names are sorted so the order is stable across runs.
    """
    root = os.path.abspath(root)
    out: List[SourceFile] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            fp = os.path.join(dirpath, name)
            if not os.path.isfile(fp):
                continue
            out.append(SourceFile(fp, entry_name(fp), os.path.getsize(fp)))
    return out
