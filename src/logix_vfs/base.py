"""
Abstract base classes for the virtual filesystem.

This module defines the capability interface that every backend implements
and every consumer programs against. Consumers should never depend on a
concrete backend type.
"""

from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import BinaryIO, Iterator, Union

PathArg = Union[str, PurePath]


class VfsDirEntry(ABC):
    """A single entry produced by listing a directory."""

    @property
    @abstractmethod
    def path(self) -> PurePath:
        """Path of the entry, usable as input to the same backend."""
        pass

    @abstractmethod
    def is_dir(self) -> bool:
        pass

    @abstractmethod
    def is_file(self) -> bool:
        pass

    @abstractmethod
    def is_symlink(self) -> bool:
        pass

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir() else "file" if self.is_file() else "other"
        return f"{self.__class__.__name__}(path='{self.path}', type={kind})"


class LogixVfs(ABC):
    """
    Read-only filesystem capability confined to a root.

    Implementations must be safe to share between threads for read-only use.
    None of them lock; a tree that is still being populated must not be
    shared.
    """

    @abstractmethod
    def canonicalize_path(self, path: PathArg) -> PurePath:
        """
        Resolve a path without touching storage.

        Args:
            path: Caller-supplied path, relative or absolute

        Returns:
            The canonical path

        Raises:
            PathOutsideBoundsError: If the path would ascend above the root
        """
        pass

    @abstractmethod
    def open_file(self, path: PathArg) -> BinaryIO:
        """
        Open a file for reading.

        Args:
            path: Caller-supplied path, relative or absolute

        Returns:
            A readable binary stream

        Raises:
            VfsNotFoundError: If no file exists at the resolved path
            VfsNotADirectoryError: If a prefix of the path is a file
            VfsAccessDeniedError: If the platform denies access
            VfsOtherError: If the path is a directory
        """
        pass

    @abstractmethod
    def read_dir(self, path: PathArg) -> Iterator[VfsDirEntry]:
        """
        List a directory.

        The returned iterator is finite and one-shot. Its order follows the
        backend's child order.

        Args:
            path: Caller-supplied path, relative or absolute

        Returns:
            Iterator over the directory entries

        Raises:
            VfsNotFoundError: If nothing exists at the resolved path
            VfsNotADirectoryError: If the resolved path is a file
        """
        pass
