"""
Confined path resolution.

Every backend turns caller-supplied paths into canonical paths through
``resolve_path`` before touching storage. Resolution is purely symbolic: it
never consults the filesystem, so it cannot be fooled by the state of the
tree, and it never produces a path above the configured root.

Example:
    >>> resolve_path(PurePosixPath("/home/zeldor"), PurePosixPath(), False,
    ...              ".config/./awesome-app/../config.toml")
    PurePosixPath('/home/zeldor/.config/config.toml')
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import List

from .base import PathArg
from .errors import PathOutsideBoundsError, VfsOtherError

logger = logging.getLogger(__name__)


def _pure_flavour(path: PurePath) -> type:
    """Pure path class matching the flavour of ``path``."""
    return PureWindowsPath if isinstance(path, PureWindowsPath) else PurePosixPath


def resolve_path(
    root: PurePath,
    cur_dir: PurePath,
    relative: bool,
    path: PathArg,
) -> PurePath:
    """
    Resolve ``path`` against ``cur_dir`` without ever leaving ``root``.

    Components are applied left to right:

    - a normal segment descends one level
    - a leading separator re-bases at ``root`` (not the filesystem root)
    - ``.`` is ignored
    - ``..`` ascends one level, or fails when already at ``root``

    Args:
        root: Absolute confinement boundary
        cur_dir: Current directory, relative to ``root``
        relative: Return the root-relative form instead of the absolute one
        path: Candidate path, relative or absolute

    Returns:
        ``root`` joined with the resolved components, or just the components
        (a pure path of ``cur_dir``'s flavour) when ``relative`` is set

    Raises:
        PathOutsideBoundsError: If the path ascends above ``root``
        VfsOtherError: If the path carries a drive or UNC prefix
    """
    candidate = path if isinstance(path, PurePath) else type(root)(path)
    components: List[str] = list(cur_dir.parts)

    parts = candidate.parts
    if candidate.drive:
        raise VfsOtherError(f"Unknown prefix {candidate.drive!r}", context={"path": str(candidate)})
    if candidate.root:
        # Re-base at the confinement root
        components.clear()
        parts = parts[1:]

    for part in parts:
        if part == ".":
            continue
        if part == "..":
            if not components:
                logger.debug(f"Rejected {candidate} as it ascends above {root}")
                raise PathOutsideBoundsError(candidate)
            components.pop()
            continue
        components.append(part)

    if relative:
        return _pure_flavour(cur_dir)(*components)
    return root.joinpath(*components)


@dataclass(frozen=True)
class PathResolver:
    """
    A root and current directory bundled for repeated resolution.

    Attributes:
        root: Absolute confinement boundary
        cur_dir: Current directory relative to ``root``
    """

    root: PurePath
    cur_dir: PurePath = field(default_factory=PurePath)

    def resolve(self, path: PathArg, relative: bool = False) -> PurePath:
        """Resolve ``path``; see ``resolve_path``."""
        return resolve_path(self.root, self.cur_dir, relative, path)

    def chdir(self, path: PathArg) -> "PathResolver":
        """
        Resolver with ``path`` as its new current directory.

        Raises:
            PathOutsideBoundsError: If ``path`` ascends above ``root``
        """
        return replace(self, cur_dir=self.resolve(path, relative=True))
