"""
logix-vfs - confined, read-only filesystem access.

Provides a capability interface for reading files and listing directories
that never lets a caller escape a configured root, with two backends:
- RelFs: a real directory tree on disk
- MemFs: an in-memory tree for fixtures and tests

Example:
    >>> from logix_vfs import RelFs
    >>> fs = RelFs("/home/zeldor")
    >>> with fs.open_file(".config/awesome-app/config.toml") as f:
    ...     data = f.read()
"""

from .base import LogixVfs, VfsDirEntry
from .config import VfsConfig, create_vfs
from .errors import (
    ErrorKind,
    PathOutsideBoundsError,
    VfsAccessDeniedError,
    VfsError,
    VfsNotADirectoryError,
    VfsNotFoundError,
    VfsOtherError,
)
from .logging_utils import init_vfs_logging
from .mem_fs import FileData, FileDataKind, MemDirEntry, MemFile, MemFs
from .paths import PathResolver, resolve_path
from .rel_fs import RealDirEntry, RelFs

__all__ = [
    # Capability interface
    "LogixVfs",
    "VfsDirEntry",
    # Backends
    "RelFs",
    "RealDirEntry",
    "MemFs",
    "MemFile",
    "MemDirEntry",
    "FileData",
    "FileDataKind",
    # Path resolution
    "resolve_path",
    "PathResolver",
    # Errors
    "ErrorKind",
    "VfsError",
    "VfsNotFoundError",
    "VfsAccessDeniedError",
    "PathOutsideBoundsError",
    "VfsNotADirectoryError",
    "VfsOtherError",
    # Configuration
    "VfsConfig",
    "create_vfs",
    "init_vfs_logging",
]

__version__ = "0.1.0"
