"""
logix-vfs CLI - inspect a confined filesystem from the command line.

Usage:
    logix-vfs --root ./project canonicalize ../escape
    logix-vfs --root ./project cat src/lib.rs
    logix-vfs --root ./project --cwd src ls
    logix-vfs --config vfs.yaml ls /
"""

import shutil
from typing import Optional

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .base import LogixVfs
from .config import VfsConfig, create_vfs
from .errors import VfsError
from .logging_utils import init_vfs_logging


def _build_vfs(
    config_file: Optional[str],
    root: Optional[str],
    memory: bool,
    cwd: Optional[str],
    log_level: Optional[str],
) -> LogixVfs:
    overrides = {
        "root": root,
        "cwd": cwd,
        "log_level": log_level,
        "backend": "memory" if memory else None,
    }
    try:
        if config_file:
            config = VfsConfig.from_yaml(config_file, **overrides)
        else:
            config = VfsConfig(**{key: value for key, value in overrides.items() if value is not None})
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        raise click.UsageError(str(e))

    init_vfs_logging(config.log_level)
    try:
        return create_vfs(config)
    except VfsError as e:
        raise click.ClickException(str(e))


class _VfsContext:
    """Builds the filesystem on first use so `--help` works without a root."""

    def __init__(self, **options):
        self._options = options
        self._vfs: Optional[LogixVfs] = None

    @property
    def vfs(self) -> LogixVfs:
        if self._vfs is None:
            self._vfs = _build_vfs(**self._options)
        return self._vfs


@click.group()
@click.version_option(package_name="logix-vfs")
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              default=None, help="YAML configuration file")
@click.option("--root", default=None, help="Root directory (overrides config and LOGIX_VFS_ROOT)")
@click.option("--memory", is_flag=True, help="Use an in-memory filesystem")
@click.option("--cwd", default=None, help="Initial current directory, relative to the root")
@click.option("--log-level", default=None, help="Log level name (e.g. DEBUG)")
@click.pass_context
def main(ctx: click.Context, config_file: Optional[str], root: Optional[str], memory: bool,
         cwd: Optional[str], log_level: Optional[str]):
    """logix-vfs - read files without leaving a root directory.

    Every PATH is resolved inside the root: '..' may not climb above it and
    a leading '/' means the root itself.
    """
    ctx.obj = _VfsContext(
        config_file=config_file, root=root, memory=memory, cwd=cwd, log_level=log_level
    )


@main.command()
@click.argument("path")
@click.pass_obj
def canonicalize(obj: _VfsContext, path: str):
    """Print the canonical form of PATH."""
    fs = obj.vfs
    try:
        click.echo(str(fs.canonicalize_path(path)))
    except VfsError as e:
        raise click.ClickException(str(e))


@main.command()
@click.argument("path")
@click.pass_obj
def cat(obj: _VfsContext, path: str):
    """Write the content of the file at PATH to stdout."""
    fs = obj.vfs
    try:
        with fs.open_file(path) as handle:
            shutil.copyfileobj(handle, click.get_binary_stream("stdout"))
    except VfsError as e:
        raise click.ClickException(str(e))


@main.command()
@click.argument("path", default=".")
@click.pass_obj
def ls(obj: _VfsContext, path: str):
    """List the directory at PATH (default: current directory)."""
    fs = obj.vfs
    table = Table(show_header=True, header_style="bold")
    table.add_column("Path")
    table.add_column("Type")

    try:
        for entry in fs.read_dir(path):
            kind = "dir" if entry.is_dir() else "file" if entry.is_file() else "other"
            if entry.is_symlink():
                kind += " (symlink)"
            table.add_row(str(entry.path), kind)
    except VfsError as e:
        raise click.ClickException(str(e))

    Console().print(table)


if __name__ == "__main__":
    main()
