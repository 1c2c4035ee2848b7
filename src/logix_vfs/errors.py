"""
Error taxonomy for the virtual filesystem.

Every failure raised by a backend is one of a small, closed set of kinds so
consumers can branch on the kind instead of parsing platform messages:

- ``VfsNotFoundError``: nothing exists at the resolved path
- ``VfsAccessDeniedError``: the platform refused access
- ``PathOutsideBoundsError``: resolution would ascend past the root
- ``VfsNotADirectoryError``: a directory was expected, a file was found
- ``VfsOtherError``: anything unclassified (log it, do not branch on it)

Each error maps back to a coarse ``OSError`` via ``to_os_error()`` for
callers that only understand standard I/O failures.
"""

import errno
import os
import time
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, Optional, Union

PathLike = Union[str, PurePath]


def _as_path(path: PathLike) -> PurePath:
    return path if isinstance(path, PurePath) else PurePath(path)


class ErrorKind(str, Enum):
    """Semantic category of a filesystem failure."""
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    PATH_OUTSIDE_BOUNDS = "path_outside_bounds"
    NOT_A_DIRECTORY = "not_a_directory"
    OTHER = "other"


class VfsError(Exception):
    """
    Base exception for all virtual filesystem errors.

    Attributes:
        kind: Semantic error category
        error_code: Stable code for programmatic handling and logs
        path: The offending path (None for unclassified errors)
        context: Additional context information
        timestamp: When the error was raised
    """

    kind: ErrorKind = ErrorKind.OTHER

    def __init__(
        self,
        message: str,
        path: Optional[PathLike] = None,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.path = _as_path(path) if path is not None else None
        self.error_code = error_code or self.kind.name
        self.context = context or {}
        self.timestamp = time.time()

    @classmethod
    def from_os_error(cls, path: PathLike, exc: OSError) -> "VfsError":
        """
        Translate a platform I/O failure into the closed taxonomy.

        Args:
            path: Path the failing operation was applied to
            exc: The platform exception

        Returns:
            The matching VfsError subclass instance
        """
        if isinstance(exc, FileNotFoundError):
            error: VfsError = VfsNotFoundError(path)
        elif isinstance(exc, PermissionError):
            error = VfsAccessDeniedError(path)
        elif isinstance(exc, NotADirectoryError) or exc.errno == errno.ENOTDIR:
            error = VfsNotADirectoryError(path)
        else:
            error = VfsOtherError(str(exc), path=path)
        error.context.setdefault("errno", exc.errno)
        return error

    def to_os_error(self) -> OSError:
        """Map this error onto a generic OSError."""
        return OSError(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "kind": self.kind.value,
            "error_code": self.error_code,
            "message": self.message,
            "path": str(self.path) if self.path is not None else None,
            "timestamp": self.timestamp,
            "context": self.context,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VfsError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.path == other.path
            and self.message == other.message
        )

    def __hash__(self) -> int:
        return hash((type(self), self.path, self.message))

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class VfsNotFoundError(VfsError):
    """Raised when no entry exists at the resolved path."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: PathLike, **kwargs):
        super().__init__(f"Failed to locate '{_as_path(path)}'", path=path, **kwargs)

    def to_os_error(self) -> OSError:
        return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(self.path))


class VfsAccessDeniedError(VfsError):
    """Raised when the platform denies access to the resolved path."""

    kind = ErrorKind.ACCESS_DENIED

    def __init__(self, path: PathLike, **kwargs):
        super().__init__(f"Failed to access '{_as_path(path)}'", path=path, **kwargs)

    def to_os_error(self) -> OSError:
        return PermissionError(errno.EACCES, os.strerror(errno.EACCES), str(self.path))


class PathOutsideBoundsError(VfsError):
    """Raised when a path would resolve to a location above the root."""

    kind = ErrorKind.PATH_OUTSIDE_BOUNDS

    def __init__(self, path: PathLike, **kwargs):
        super().__init__(
            f"The path '{_as_path(path)}' is outside acceptable bounds", path=path, **kwargs
        )

    def to_os_error(self) -> OSError:
        return OSError(errno.EINVAL, os.strerror(errno.EINVAL), str(self.path))


class VfsNotADirectoryError(VfsError):
    """
    Raised when a directory was expected but a file was found.

    The path names the offending prefix, which may be shorter than the path
    the caller asked for.
    """

    kind = ErrorKind.NOT_A_DIRECTORY

    def __init__(self, path: PathLike, **kwargs):
        super().__init__(f"The path '{_as_path(path)}' is not a directory", path=path, **kwargs)

    def to_os_error(self) -> OSError:
        return NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(self.path))


class VfsOtherError(VfsError):
    """
    Catch-all for failures without a dedicated kind.

    Do not depend on the message for anything other than logging. A failure
    mode that needs handling should get its own kind instead.
    """

    kind = ErrorKind.OTHER
