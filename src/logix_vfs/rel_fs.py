"""
Backend mapping onto a real directory tree.

Paths are resolved symbolically against the root before the platform is
consulted, so ``..`` can never climb out of the tree. Symlinks inside the
tree are followed by the platform as usual.
"""

import logging
import os
from pathlib import Path, PurePath, PurePosixPath
from typing import BinaryIO, Iterator, Optional

from .base import LogixVfs, PathArg, VfsDirEntry
from .errors import VfsError, VfsOtherError
from .paths import PathResolver

logger = logging.getLogger(__name__)

_LOG_EXTRA = {"backend": "rel_fs"}


class RealDirEntry(VfsDirEntry):
    """
    Directory entry backed by ``os.DirEntry``.

    ``path`` is anchored at the backend root (``/sub/name``) so it resolves
    to the same entry whatever the current directory is; ``host_path`` is
    the location on disk.
    """

    def __init__(self, path: PurePath, entry: os.DirEntry):
        self._path = path
        self._entry = entry

    @property
    def path(self) -> PurePath:
        return self._path

    @property
    def host_path(self) -> Path:
        return Path(self._entry.path)

    def is_dir(self) -> bool:
        return self._entry.is_dir()

    def is_file(self) -> bool:
        return self._entry.is_file()

    def is_symlink(self) -> bool:
        return self._entry.is_symlink()


class RelReadDir(Iterator[RealDirEntry]):
    """One-shot iterator over a real directory, in platform order."""

    def __init__(self, host_path: Path, virtual_path: PurePath):
        self._host_path = host_path
        self._virtual_path = virtual_path
        try:
            self._scandir = os.scandir(host_path)
        except OSError as e:
            raise VfsError.from_os_error(host_path, e) from e
        except ValueError as e:
            raise VfsOtherError(str(e), path=host_path) from e

    def __iter__(self) -> "RelReadDir":
        return self

    def __next__(self) -> RealDirEntry:
        try:
            entry = next(self._scandir)
        except StopIteration:
            self.close()
            raise
        except OSError as e:
            self.close()
            raise VfsError.from_os_error(self._host_path, e) from e
        return RealDirEntry(self._virtual_path / entry.name, entry)

    def close(self) -> None:
        self._scandir.close()

    def __enter__(self) -> "RelReadDir":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class RelFs(LogixVfs):
    """
    Filesystem rooted at a real directory.

    Example:
        >>> fs = RelFs("/home/zeldor")
        >>> fs.chdir(".config")
        PurePosixPath('.config')
        >>> fs.canonicalize_path("awesome-app/../config.toml")
        PosixPath('/home/zeldor/.config/config.toml')
    """

    def __init__(self, root: PathArg, cur_dir: Optional[PathArg] = None):
        """
        Initialize the backend.

        Args:
            root: Directory that serves as the confinement root
            cur_dir: Optional initial directory, applied via ``chdir``
        """
        self._resolver = PathResolver(Path(root))
        if cur_dir is not None:
            self.chdir(cur_dir)

    @property
    def root(self) -> Path:
        return self._resolver.root

    @property
    def cur_dir(self) -> PurePath:
        return self._resolver.cur_dir

    def chdir(self, path: PathArg) -> PurePath:
        """
        Change the current directory.

        The directory is not required to exist; only confinement is checked.

        Returns:
            The new current directory, relative to the root

        Raises:
            PathOutsideBoundsError: If the target would ascend above the root
        """
        self._resolver = self._resolver.chdir(path)
        logger.debug(f"Changed directory to '{self.cur_dir}'", extra=_LOG_EXTRA)
        return self.cur_dir

    def resolve_path(self, path: PathArg, relative: bool = False) -> PurePath:
        return self._resolver.resolve(path, relative)

    def canonicalize_path(self, path: PathArg) -> Path:
        return self.resolve_path(path)

    def open_file(self, path: PathArg) -> BinaryIO:
        full_path = self.resolve_path(path)
        try:
            if full_path.is_dir():
                raise VfsOtherError(f"The path '{path}' is not a file", path=full_path)
            handle = open(full_path, "rb")
        except IsADirectoryError as e:
            raise VfsOtherError(f"The path '{path}' is not a file", path=full_path) from e
        except OSError as e:
            error = VfsError.from_os_error(full_path, e)
            logger.debug(f"Failed to open '{full_path}': {error}", extra=_LOG_EXTRA)
            raise error from e
        except ValueError as e:
            # Names the platform cannot represent, e.g. an embedded NUL
            raise VfsOtherError(str(e), path=full_path) from e
        logger.debug(f"Opened '{full_path}'", extra=_LOG_EXTRA)
        return handle

    def read_dir(self, path: PathArg) -> RelReadDir:
        full_path = self.resolve_path(path)
        virtual_path = PurePosixPath("/").joinpath(*self.resolve_path(path, relative=True).parts)
        return RelReadDir(full_path, virtual_path)

    def __repr__(self) -> str:
        return f"RelFs(root='{self.root}', cur_dir='{self.cur_dir}')"
