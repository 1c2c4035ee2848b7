"""
Tests for the in-memory filesystem.

Tests cover:
- Seeding files with and without directory creation
- Overwrite rules for files and directories
- open_file / read_dir / canonicalize_path behavior and errors
- FileData ownership kinds
- Invisibility of empty placeholders
"""

from pathlib import PurePosixPath

import pytest

from logix_vfs.base import LogixVfs
from logix_vfs.errors import (
    PathOutsideBoundsError,
    VfsNotADirectoryError,
    VfsNotFoundError,
    VfsOtherError,
)
from logix_vfs.mem_fs import EntryKind, FileData, FileDataKind, MemDirEntry, MemFs

HELLO_RS = b"fn hello() -> i32 {\n42}\n"
WORLD_RS = b"fn world() -> i32 {\n1337}\n"


@pytest.fixture
def fs():
    """MemFs with /src/hello.rs and /src/world.rs."""
    mem = MemFs()
    mem.set_static_file("/src/hello.rs", HELLO_RS, True)
    mem.set_static_file("/src/world.rs", WORLD_RS, True)
    return mem


def listing(mem, path):
    return [(str(entry.path), entry.is_dir(), entry.is_file()) for entry in mem.read_dir(path)]


# ==============================================================================
# Seeding Tests
# ==============================================================================


class TestSeeding:
    """Tests for set_file and set_static_file."""

    def test_missing_parent_without_create_dir(self):
        """Test seeding into a missing directory fails when creation is off."""
        mem = MemFs()

        with pytest.raises(VfsNotFoundError) as exc_info:
            mem.set_static_file("/src/hello.rs", HELLO_RS, False)
        assert exc_info.value == VfsNotFoundError("/src/hello.rs")

    def test_create_dir_builds_intermediate_directories(self):
        """Test missing directories are created on demand."""
        mem = MemFs()
        mem.set_static_file("/src/deep/nested/hello.rs", HELLO_RS, True)

        assert listing(mem, "/") == [("/src", True, False)]
        assert listing(mem, "/src/deep") == [("/src/deep/nested", True, False)]
        assert mem.open_file("/src/deep/nested/hello.rs").read() == HELLO_RS

    def test_existing_directory_does_not_need_create_dir(self, fs):
        """Test a file can be added to an existing directory with creation off."""
        fs.set_file("/src/lib.rs", b"mod hello;", False)

        assert fs.open_file("/src/lib.rs").read() == b"mod hello;"

    def test_file_as_intermediate_directory_is_rejected(self, fs):
        """Test a file prefix is never turned into a directory."""
        with pytest.raises(VfsOtherError) as exc_info:
            fs.set_static_file("/src/hello.rs/world.rs", HELLO_RS, False)

        assert exc_info.value.message == (
            "Cannot create directory '/src/hello.rs' as it is a file for '/src/hello.rs/world.rs'"
        )
        assert exc_info.value.path == PurePosixPath("/src/hello.rs")

        with pytest.raises(VfsOtherError):
            fs.set_static_file("/src/hello.rs/world.rs", HELLO_RS, True)

    def test_failed_seed_leaves_tree_unchanged(self, fs):
        """Test a rejected seed changes nothing visible."""
        before = listing(fs, "/src")

        with pytest.raises(VfsOtherError):
            fs.set_file("/src/hello.rs/world.rs/deeper.rs", b"x", True)

        assert listing(fs, "/src") == before
        assert fs.open_file("/src/hello.rs").read() == HELLO_RS

    def test_overwrite_file(self, fs):
        """Test seeding an existing file replaces its content."""
        fs.set_file("/src/hello.rs", b"replaced", False)

        assert fs.open_file("/src/hello.rs").read() == b"replaced"

    def test_directory_is_never_overwritten(self, fs):
        """Test a directory cannot be replaced by a file."""
        with pytest.raises(VfsOtherError) as exc_info:
            fs.set_file("/src", b"oops", False)

        assert exc_info.value.message == "Can't overwrite directory with a file at '/src'"
        assert listing(fs, "/src") == [
            ("/src/hello.rs", False, True),
            ("/src/world.rs", False, True),
        ]

    def test_root_cannot_hold_a_file(self):
        """Test the root is reserved for a directory."""
        with pytest.raises(VfsOtherError):
            MemFs().set_file("/", b"x", True)

    def test_relative_and_dotted_seed_paths(self):
        """Test seed paths are canonicalized against the root."""
        mem = MemFs()
        mem.set_file("src/./tmp/../lib.rs", b"lib", True)

        assert mem.open_file("/src/lib.rs").read() == b"lib"

    def test_seed_path_cannot_escape(self):
        """Test seeding above the root is rejected."""
        with pytest.raises(PathOutsideBoundsError):
            MemFs().set_file("../etc/passwd", b"x", True)

    def test_from_files(self):
        """Test building a tree from a mapping."""
        mem = MemFs.from_files({"/a/one.txt": b"1", "a/b/two.txt": bytearray(b"2")})

        assert listing(mem, "/a") == [("/a/b", True, False), ("/a/one.txt", False, True)]
        assert mem.open_file("/a/b/two.txt").read() == b"2"


# ==============================================================================
# FileData Tests
# ==============================================================================


class TestFileData:
    """Tests for static and shared file buffers."""

    def test_static_data_is_stored_as_given(self, fs):
        """Test static files keep the caller's bytes object."""
        handle = fs.open_file("/src/hello.rs")

        assert handle.data.kind is FileDataKind.STATIC
        assert handle.data.buffer is HELLO_RS
        assert handle.data == FileData.static(HELLO_RS)

    def test_static_data_must_be_bytes(self):
        """Test mutable buffers are refused for static files."""
        with pytest.raises(TypeError):
            MemFs().set_static_file("/x", bytearray(b"x"), True)

    def test_shared_data_is_frozen(self):
        """Test later changes to the source buffer are not visible."""
        mem = MemFs()
        source = bytearray(b"before")
        mem.set_file("/x", source, True)
        source[:] = b"after!"

        handle = mem.open_file("/x")
        assert handle.data.kind is FileDataKind.SHARED
        assert handle.read() == b"before"

    def test_handles_share_one_buffer(self, fs):
        """Test independent cursors over the same buffer."""
        first = fs.open_file("/src/world.rs")
        second = fs.open_file("/src/world.rs")

        assert first.read(5) == WORLD_RS[:5]
        assert second.read() == WORLD_RS
        assert first.data.buffer is second.data.buffer

    def test_views(self):
        """Test the read-only views of the buffer."""
        data = FileData.shared(b"abc")

        assert bytes(data) == b"abc"
        assert len(data) == 3
        assert data.view().readonly
        assert repr(data) == "FileData(kind=shared, size=3)"


# ==============================================================================
# open_file Tests
# ==============================================================================


class TestOpenFile:
    """Tests for MemFs.open_file."""

    def test_open_file_content(self, fs):
        """Test reading a seeded file."""
        with fs.open_file("/src/hello.rs") as handle:
            assert handle.read() == HELLO_RS

    def test_open_relative_path(self, fs):
        """Test relative paths resolve from the root."""
        assert fs.open_file("src/../src/hello.rs").read() == HELLO_RS

    def test_open_directory(self, fs):
        """Test opening a directory fails with a 'not a file' error."""
        with pytest.raises(VfsOtherError) as exc_info:
            fs.open_file("/src")
        assert exc_info.value.message == "The path '/src' is not a file"

    def test_open_below_a_file(self, fs):
        """Test a file used as a directory names the offending prefix."""
        with pytest.raises(VfsNotADirectoryError) as exc_info:
            fs.open_file("/src/hello.rs/world.rs")
        assert exc_info.value == VfsNotADirectoryError("/src/hello.rs")

    def test_open_missing(self, fs):
        """Test missing files are reported as not found."""
        with pytest.raises(VfsNotFoundError) as exc_info:
            fs.open_file("/src/missing.rs")
        assert exc_info.value == VfsNotFoundError("/src/missing.rs")

    def test_open_on_empty_tree(self):
        """Test an empty tree has nothing to open."""
        with pytest.raises(VfsNotFoundError):
            MemFs().open_file("/anything")


# ==============================================================================
# read_dir Tests
# ==============================================================================


class TestReadDir:
    """Tests for MemFs.read_dir."""

    def test_root_listing(self, fs):
        """Test listing the root."""
        entries = list(fs.read_dir("/"))

        assert len(entries) == 1
        assert entries[0].path == PurePosixPath("/src")
        assert entries[0].is_dir()
        assert not entries[0].is_file()
        assert not entries[0].is_symlink()

    def test_directory_listing(self, fs):
        """Test files are listed with their full paths."""
        assert listing(fs, "/src") == [
            ("/src/hello.rs", False, True),
            ("/src/world.rs", False, True),
        ]

    def test_listing_is_sorted(self):
        """Test children come out in sorted key order regardless of insertion."""
        mem = MemFs.from_files({"/d/b": b"", "/d/a": b"", "/d/C": b"", "/d/a0/x": b""})

        assert [entry.path.name for entry in mem.read_dir("/d")] == ["C", "a", "a0", "b"]

    def test_listing_is_one_shot(self, fs):
        """Test the iterator cannot be restarted."""
        it = fs.read_dir("/src")

        assert len(list(it)) == 2
        assert list(it) == []

    def test_listing_is_a_context_manager(self, fs):
        """Test closing the iterator ends it."""
        with fs.read_dir("/src") as it:
            next(it)
        assert list(it) == []

    def test_listing_a_file(self, fs):
        """Test listing a file fails with not a directory."""
        with pytest.raises(VfsNotADirectoryError) as exc_info:
            fs.read_dir("/src/hello.rs")
        assert exc_info.value == VfsNotADirectoryError("/src/hello.rs")

    def test_listing_missing(self, fs):
        """Test listing a missing directory fails with not found."""
        with pytest.raises(VfsNotFoundError):
            fs.read_dir("/lib")

    def test_listing_empty_tree(self):
        """Test the root of an empty tree does not exist yet."""
        with pytest.raises(VfsNotFoundError):
            MemFs().read_dir("/")

    def test_entries_are_values(self):
        """Test directory entries compare by path and kind."""
        assert MemDirEntry(PurePosixPath("/a"), EntryKind.FILE) == MemDirEntry(
            PurePosixPath("/a"), EntryKind.FILE
        )


# ==============================================================================
# Empty Placeholder Tests
# ==============================================================================


class TestEmptyPlaceholders:
    """Tests that not-yet-materialized entries stay invisible."""

    def test_failed_seed_placeholder_is_invisible(self, fs):
        """Test a placeholder left by a failed seed is not listed or opened."""
        with pytest.raises(VfsNotFoundError):
            fs.set_file("/src/sub/file.rs", b"x", False)

        assert [entry.path.name for entry in fs.read_dir("/src")] == ["hello.rs", "world.rs"]
        with pytest.raises(VfsNotFoundError):
            fs.read_dir("/src/sub")
        with pytest.raises(VfsNotFoundError):
            fs.open_file("/src/sub")

    def test_placeholder_can_be_materialized_later(self, fs):
        """Test a placeholder becomes a directory once seeded with create_dir."""
        with pytest.raises(VfsNotFoundError):
            fs.set_file("/src/sub/file.rs", b"x", False)
        fs.set_file("/src/sub/file.rs", b"x", True)

        assert listing(fs, "/src/sub") == [("/src/sub/file.rs", False, True)]

    def test_directory_of_only_placeholders_lists_empty(self, fs):
        """Test a directory whose children are all placeholders lists as empty."""
        fs.set_file("/only/file.rs", b"x", True)
        _, node = fs.resolve_node("/only")
        node.children.clear()
        node.child("ghost")
        node.child("phantom")

        assert list(fs.read_dir("/only")) == []


# ==============================================================================
# canonicalize_path Tests
# ==============================================================================


class TestCanonicalize:
    """Tests for MemFs.canonicalize_path."""

    def test_canonical_paths(self):
        """Test paths resolve against '/' without touching the tree."""
        mem = MemFs()

        assert mem.canonicalize_path("a/./b/../c") == PurePosixPath("/a/c")
        assert mem.canonicalize_path("/") == PurePosixPath("/")
        assert mem.canonicalize_path("") == PurePosixPath("/")

    def test_escape_is_rejected(self):
        """Test '..' at the root fails rather than clamping."""
        with pytest.raises(PathOutsideBoundsError):
            MemFs().canonicalize_path("..")
        with pytest.raises(PathOutsideBoundsError):
            MemFs().canonicalize_path("/a/../../b")

    def test_is_a_logix_vfs(self):
        """Test MemFs implements the capability interface."""
        assert isinstance(MemFs(), LogixVfs)


# ==============================================================================
# resolve_node Tests
# ==============================================================================


class TestResolveNode:
    """Tests for MemFs.resolve_node."""

    def test_accepts_plain_strings(self, fs):
        """Test string paths are canonicalized before walking the tree."""
        path, node = fs.resolve_node("src/./tmp/../hello.rs")

        assert path == PurePosixPath("/src/hello.rs")
        assert node.is_file
        assert bytes(node.data) == HELLO_RS

    def test_root(self, fs):
        """Test the root resolves to the top directory."""
        path, node = fs.resolve_node("/")

        assert path == PurePosixPath("/")
        assert node.is_dir

    def test_errors(self, fs):
        """Test walking past a file or above the root fails."""
        with pytest.raises(VfsNotADirectoryError) as exc_info:
            fs.resolve_node("/src/hello.rs/x")
        assert exc_info.value == VfsNotADirectoryError("/src/hello.rs")

        with pytest.raises(VfsNotFoundError):
            fs.resolve_node("/lib/x")
        with pytest.raises(PathOutsideBoundsError):
            fs.resolve_node("../x")
