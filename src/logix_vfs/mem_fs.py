"""
In-memory filesystem for fixtures and tests.

The tree is made of ``Entry`` nodes that are either an empty placeholder, a
file holding an immutable byte buffer, or a directory mapping segment names
to child entries. The tree only grows: directories appear when a file is
seeded with ``create_dir=True`` and nothing is ever removed.

All paths are POSIX paths rooted at ``/`` regardless of the host platform.

Example:
    >>> fs = MemFs()
    >>> fs.set_file("/src/lib.rs", b"pub fn answer() -> i32 { 42 }", create_dir=True)
    >>> [str(entry.path) for entry in fs.read_dir("/src")]
    ['/src/lib.rs']
"""

import io
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .base import LogixVfs, PathArg, VfsDirEntry
from .errors import VfsNotADirectoryError, VfsNotFoundError, VfsOtherError
from .paths import PathResolver

logger = logging.getLogger(__name__)

_LOG_EXTRA = {"backend": "mem_fs"}

_ROOT = PurePosixPath("/")

BytesLike = Union[bytes, bytearray, memoryview]


class FileDataKind(str, Enum):
    """Ownership of a file buffer."""
    STATIC = "static"  # Caller-owned bytes, stored as given
    SHARED = "shared"  # Frozen copy shared by every open handle


@dataclass(frozen=True)
class FileData:
    """Immutable file content with a single read-only view."""

    kind: FileDataKind
    buffer: bytes = field(repr=False)

    @classmethod
    def static(cls, data: bytes) -> "FileData":
        if not isinstance(data, bytes):
            raise TypeError(f"Static file data must be bytes, got {type(data).__name__}")
        return cls(FileDataKind.STATIC, data)

    @classmethod
    def shared(cls, data: BytesLike) -> "FileData":
        return cls(FileDataKind.SHARED, bytes(data))

    def view(self) -> memoryview:
        return memoryview(self.buffer)

    def __bytes__(self) -> bytes:
        return self.buffer

    def __len__(self) -> int:
        return len(self.buffer)

    def __repr__(self) -> str:
        return f"FileData(kind={self.kind.value}, size={len(self.buffer)})"


class EntryKind(str, Enum):
    EMPTY = "empty"
    FILE = "file"
    DIR = "dir"


class Entry:
    """
    Node of the in-memory tree.

    A FILE entry has no children. A DIR entry's children are looked up by
    exact segment name and iterated in sorted order.
    """

    __slots__ = ("kind", "data", "children")

    def __init__(self):
        self.kind = EntryKind.EMPTY
        self.data: Optional[FileData] = None
        self.children: Optional[Dict[str, "Entry"]] = None

    @property
    def is_empty(self) -> bool:
        return self.kind is EntryKind.EMPTY

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIR

    def make_dir(self) -> None:
        self.kind = EntryKind.DIR
        self.data = None
        self.children = {}

    def make_file(self, data: FileData) -> None:
        self.kind = EntryKind.FILE
        self.data = data
        self.children = None

    def child(self, name: str) -> "Entry":
        """Child entry for ``name``, adding an empty placeholder if missing."""
        return self.children.setdefault(name, Entry())

    def sorted_children(self) -> List[Tuple[str, "Entry"]]:
        return sorted(self.children.items())

    def __repr__(self) -> str:
        if self.is_file:
            return f"Entry(file, {self.data!r})"
        if self.is_dir:
            return f"Entry(dir, children={len(self.children)})"
        return "Entry(empty)"


class MemFile(io.BytesIO):
    """Readable cursor over a file's buffer."""

    def __init__(self, data: FileData):
        super().__init__(data.buffer)
        self.data = data


@dataclass(frozen=True)
class MemDirEntry(VfsDirEntry):
    """Listing entry of the in-memory tree. Never a symlink."""

    entry_path: PurePosixPath
    entry_kind: EntryKind

    @property
    def path(self) -> PurePosixPath:
        return self.entry_path

    def is_dir(self) -> bool:
        return self.entry_kind is EntryKind.DIR

    def is_file(self) -> bool:
        return self.entry_kind is EntryKind.FILE

    def is_symlink(self) -> bool:
        return False


class MemReadDir(Iterator[MemDirEntry]):
    """
    One-shot iterator over a directory snapshot.

    Children holding an empty placeholder are not materialized and are
    skipped.
    """

    def __init__(self, base: PurePosixPath, node: Entry):
        self._it = iter([
            MemDirEntry(base / name, child.kind)
            for name, child in node.sorted_children()
            if not child.is_empty
        ])

    def __iter__(self) -> "MemReadDir":
        return self

    def __next__(self) -> MemDirEntry:
        return next(self._it)

    def close(self) -> None:
        self._it = iter(())

    def __enter__(self) -> "MemReadDir":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class MemFs(LogixVfs):
    """
    Filesystem held entirely in memory.

    Seed it with ``set_file``/``set_static_file`` (or ``from_files``) before
    sharing it; consumer-facing operations never mutate the tree.
    """

    def __init__(self):
        self._root = Entry()
        self._resolver = PathResolver(_ROOT, PurePosixPath())

    @classmethod
    def from_files(cls, files: Mapping[str, BytesLike]) -> "MemFs":
        """
        Build a tree from a path to content mapping, creating directories.

        Args:
            files: Mapping of absolute or root-relative paths to file content

        Returns:
            The populated MemFs
        """
        fs = cls()
        for path, data in files.items():
            fs.set_file(path, data, create_dir=True)
        return fs

    def _resolve_path(self, path: PathArg) -> PurePosixPath:
        return self._resolver.resolve(PurePosixPath(path))

    def _resolve_node_mut(self, path: PurePosixPath, create_dir: bool) -> Entry:
        cur = self._root
        names = path.parts[1:]

        for i, name in enumerate(names):
            if cur.is_empty:
                if not create_dir:
                    raise VfsNotFoundError(path)
                cur.make_dir()
            elif cur.is_file:
                prefix = _ROOT.joinpath(*names[:i])
                raise VfsOtherError(
                    f"Cannot create directory '{prefix}' as it is a file for '{path}'",
                    path=prefix,
                )
            cur = cur.child(name)

        return cur

    def resolve_node(self, path: PathArg) -> Tuple[PurePosixPath, Entry]:
        """
        Walk to the node at ``path`` without creating anything.

        Args:
            path: Caller-supplied path, canonicalized against the root first

        Returns:
            Tuple of (canonical path, entry)

        Raises:
            PathOutsideBoundsError: If the path ascends above the root
            VfsNotFoundError: If any step is missing or an empty placeholder
            VfsNotADirectoryError: If a file sits where a directory is needed
        """
        path = self._resolve_path(path)
        cur = self._root
        names = path.parts[1:]

        for i, name in enumerate(names):
            if cur.is_empty:
                raise VfsNotFoundError(path)
            if cur.is_file:
                raise VfsNotADirectoryError(_ROOT.joinpath(*names[:i]))
            child = cur.children.get(name)
            if child is None:
                raise VfsNotFoundError(path)
            cur = child

        return path, cur

    def _set_data(self, path: PathArg, data: FileData, create_dir: bool) -> None:
        resolved = self._resolve_path(path)
        if resolved == _ROOT:
            raise VfsOtherError("Can't overwrite the root directory with a file", path=resolved)
        node = self._resolve_node_mut(resolved, create_dir)
        if node.is_dir:
            raise VfsOtherError(f"Can't overwrite directory with a file at '{path}'", path=path)
        node.make_file(data)
        logger.debug(f"Seeded '{path}' with {data!r}", extra=_LOG_EXTRA)

    def set_static_file(self, path: PathArg, data: bytes, create_dir: bool) -> None:
        """
        Store caller-owned bytes at ``path`` without copying them.

        Args:
            path: Destination path
            data: File content
            create_dir: Create missing parent directories

        Raises:
            VfsNotFoundError: If a parent is missing and ``create_dir`` is False
            VfsOtherError: If a parent is a file or ``path`` is a directory
        """
        self._set_data(path, FileData.static(data), create_dir)

    def set_file(self, path: PathArg, data: BytesLike, create_dir: bool) -> None:
        """Store a frozen copy of ``data`` at ``path``; see ``set_static_file``."""
        self._set_data(path, FileData.shared(data), create_dir)

    def canonicalize_path(self, path: PathArg) -> PurePosixPath:
        return self._resolve_path(path)

    def open_file(self, path: PathArg) -> MemFile:
        _, node = self.resolve_node(path)
        if node.is_empty:
            raise VfsNotFoundError(path)
        if node.is_dir:
            raise VfsOtherError(f"The path '{path}' is not a file", path=path)
        return MemFile(node.data)

    def read_dir(self, path: PathArg) -> MemReadDir:
        resolved, node = self.resolve_node(path)
        if node.is_empty:
            raise VfsNotFoundError(path)
        if node.is_file:
            raise VfsNotADirectoryError(resolved)
        return MemReadDir(resolved, node)

    def __repr__(self) -> str:
        return f"MemFs(root={self._root!r})"
