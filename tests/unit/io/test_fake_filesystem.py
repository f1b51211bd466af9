"""Tests for MemoryFileSystemProvider (async).

Tests the in-memory provider implementation.
"""

import pytest

from workfs.core.io import (
    DirectoryNotEmpty,
    FileChangeEvent,
    FileChangeType,
    FileExists,
    FileExistsAsFile,
    FileIsADirectory,
    FileNotADirectory,
    FileNotFound,
    FileSystemError,
    FileType,
    MemoryFileSystemProvider,
    NoPermissions,
    ResourceLocator,
)


@pytest.fixture
def fs():
    """Provide fresh MemoryFileSystemProvider instance."""
    return MemoryFileSystemProvider()


@pytest.fixture
def test_root():
    """Provide test root locator."""
    return ResourceLocator(scheme="memfs", path="/test")


class TestStat:
    """Tests for metadata."""

    async def test_root_is_directory(self, fs: MemoryFileSystemProvider):
        """Test the root always exists as a directory."""
        st = await fs.stat(ResourceLocator(scheme="memfs", path="/"))
        assert st.type == FileType.DIRECTORY

    async def test_stat_nonexistent_raises(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test stat on a missing entry raises FileNotFound."""
        with pytest.raises(FileNotFound):
            await fs.stat(test_root)

    async def test_stat_file_reports_size_and_times(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test file metadata carries size and timestamps."""
        test_file = test_root.joinpath("test.txt")
        await fs.write_file(test_file, b"content")

        st = await fs.stat(test_file)
        assert st.type == FileType.FILE
        assert st.size == 7
        assert st.ctime > 0
        assert st.mtime >= st.ctime

    async def test_stat_below_file_raises_not_found(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test a path through a file is not found."""
        await fs.write_file(test_root.joinpath("file"), b"x")
        with pytest.raises(FileNotFound):
            await fs.stat(test_root.joinpath("file", "child"))


class TestReadWrite:
    """Tests for read/write operations."""

    async def test_write_and_read_roundtrip(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test write → read roundtrip succeeds."""
        test_file = test_root.joinpath("test.txt")
        await fs.write_file(test_file, b"Hello, world!")
        assert await fs.read_file(test_file) == b"Hello, world!"

    async def test_write_creates_parent_directories(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test that write auto-creates parent directories."""
        await fs.write_file(test_root.joinpath("a", "b", "c", "test.txt"), b"content")

        assert (await fs.stat(test_root.joinpath("a"))).type == FileType.DIRECTORY
        assert (await fs.stat(test_root.joinpath("a", "b", "c"))).type == FileType.DIRECTORY

    async def test_write_below_file_raises(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test writing underneath a file raises FileNotADirectory."""
        await fs.write_file(test_root.joinpath("file"), b"x")
        with pytest.raises(FileNotADirectory):
            await fs.write_file(test_root.joinpath("file", "child"), b"y")

    async def test_write_to_directory_raises(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test writing over a directory raises FileIsADirectory."""
        await fs.create_directory(test_root)
        with pytest.raises(FileIsADirectory):
            await fs.write_file(test_root, b"x")

    async def test_read_nonexistent_raises_error(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test reading nonexistent file raises FileNotFound."""
        with pytest.raises(FileNotFound):
            await fs.read_file(test_root.joinpath("nonexistent.txt"))

    async def test_read_directory_as_file_raises(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test reading a directory raises FileIsADirectory."""
        await fs.create_directory(test_root)
        with pytest.raises(FileIsADirectory):
            await fs.read_file(test_root)

    async def test_write_overwrites_existing_file(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test that write overwrites existing files."""
        test_file = test_root.joinpath("test.txt")
        await fs.write_file(test_file, b"first")
        await fs.write_file(test_file, b"second")
        assert await fs.read_file(test_file) == b"second"


class TestDirectories:
    """Tests for directory operations."""

    async def test_create_directory_creates_parents(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test create_directory creates parent directories."""
        nested = test_root.joinpath("a", "b", "c")
        await fs.create_directory(nested)

        assert (await fs.stat(test_root)).type == FileType.DIRECTORY
        assert (await fs.stat(nested)).type == FileType.DIRECTORY

    async def test_create_existing_directory_is_noop(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test creating an existing directory does not raise."""
        await fs.create_directory(test_root)
        await fs.create_directory(test_root)

    async def test_create_directory_over_file_raises(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test create_directory where a file exists raises FileExistsAsFile."""
        await fs.write_file(test_root, b"x")
        with pytest.raises(FileExistsAsFile):
            await fs.create_directory(test_root)

    async def test_read_directory_returns_children(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test read_directory returns immediate children with types."""
        await fs.write_file(test_root.joinpath("file1.txt"), b"content1")
        await fs.write_file(test_root.joinpath("file2.txt"), b"content2")
        await fs.create_directory(test_root.joinpath("subdir", "nested"))

        children = await fs.read_directory(test_root)
        assert sorted(children) == [
            ("file1.txt", FileType.FILE),
            ("file2.txt", FileType.FILE),
            ("subdir", FileType.DIRECTORY),
        ]

    async def test_read_directory_on_file_raises(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test read_directory on a file raises FileNotADirectory."""
        await fs.write_file(test_root, b"x")
        with pytest.raises(FileNotADirectory):
            await fs.read_directory(test_root)

    async def test_read_directory_nonexistent_raises_error(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test read_directory on nonexistent directory raises FileNotFound."""
        with pytest.raises(FileNotFound):
            await fs.read_directory(test_root)


class TestRemoval:
    """Tests for file/directory removal."""

    async def test_delete_file(self, fs: MemoryFileSystemProvider, test_root: ResourceLocator):
        """Test delete removes files."""
        test_file = test_root.joinpath("test.txt")
        await fs.write_file(test_file, b"content")

        await fs.delete(test_file)
        with pytest.raises(FileNotFound):
            await fs.stat(test_file)

    async def test_delete_nonexistent_raises_error(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test delete on a missing entry raises FileNotFound."""
        await fs.create_directory(test_root)
        with pytest.raises(FileNotFound):
            await fs.delete(test_root.joinpath("nonexistent.txt"))

    async def test_delete_non_empty_directory_requires_recursive(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test non-recursive delete of a non-empty directory raises and keeps content."""
        child = test_root.joinpath("file.txt")
        await fs.write_file(child, b"content")

        with pytest.raises(DirectoryNotEmpty):
            await fs.delete(test_root)
        assert await fs.read_file(child) == b"content"

    async def test_delete_recursive_removes_contents(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test recursive delete removes directory and descendants."""
        await fs.write_file(test_root.joinpath("a", "file2.txt"), b"content2")

        await fs.delete(test_root, recursive=True)
        with pytest.raises(FileNotFound):
            await fs.stat(test_root.joinpath("a", "file2.txt"))
        with pytest.raises(FileNotFound):
            await fs.stat(test_root)

    async def test_delete_root_raises(self, fs: MemoryFileSystemProvider):
        """Test the root directory cannot be deleted."""
        with pytest.raises(NoPermissions):
            await fs.delete(ResourceLocator(scheme="memfs", path="/"), recursive=True)


class TestRenameCopy:
    """Tests for rename and copy."""

    async def test_rename_moves_file(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test rename moves content and removes the source."""
        source = test_root.joinpath("a.txt")
        target = test_root.joinpath("sub", "b.txt")
        await fs.write_file(source, b"data")

        await fs.rename(source, target)
        assert await fs.read_file(target) == b"data"
        with pytest.raises(FileNotFound):
            await fs.stat(source)

    async def test_rename_existing_target_requires_overwrite(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test rename onto an existing target raises unless overwrite."""
        source = test_root.joinpath("a.txt")
        target = test_root.joinpath("b.txt")
        await fs.write_file(source, b"new")
        await fs.write_file(target, b"old")

        with pytest.raises(FileExists):
            await fs.rename(source, target)
        await fs.rename(source, target, overwrite=True)
        assert await fs.read_file(target) == b"new"

    async def test_rename_missing_source_raises(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test rename of a missing source raises FileNotFound."""
        with pytest.raises(FileNotFound):
            await fs.rename(test_root.joinpath("a"), test_root.joinpath("b"))

    async def test_rename_into_itself_raises(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test moving a directory underneath itself is rejected."""
        await fs.create_directory(test_root)
        with pytest.raises(FileSystemError):
            await fs.rename(test_root, test_root.joinpath("inner"))

    async def test_copy_directory_is_deep(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test copy duplicates a tree independently of the source."""
        source = test_root.joinpath("src")
        target = test_root.joinpath("dst")
        await fs.write_file(source.joinpath("nested", "f.txt"), b"one")

        await fs.copy(source, target)
        await fs.write_file(source.joinpath("nested", "f.txt"), b"two")

        assert await fs.read_file(target.joinpath("nested", "f.txt")) == b"one"

    async def test_copy_existing_target_requires_overwrite(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test copy onto an existing target raises unless overwrite."""
        source = test_root.joinpath("a.txt")
        target = test_root.joinpath("b.txt")
        await fs.write_file(source, b"new")
        await fs.write_file(target, b"old")

        with pytest.raises(FileExists):
            await fs.copy(source, target)
        await fs.copy(source, target, overwrite=True)
        assert await fs.read_file(target) == b"new"


class TestChangeEvents:
    """Tests for change notifications."""

    async def test_mutations_emit_events(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test create, change and delete are reported in order."""
        events: list[FileChangeEvent] = []
        fs.on_did_change_file(events.append)
        test_file = test_root.joinpath("f.txt")

        await fs.write_file(test_file, b"1")
        await fs.write_file(test_file, b"2")
        await fs.delete(test_file)

        assert events == [
            FileChangeEvent(FileChangeType.CREATED, test_root),
            FileChangeEvent(FileChangeType.CREATED, test_file),
            FileChangeEvent(FileChangeType.CHANGED, test_file),
            FileChangeEvent(FileChangeType.DELETED, test_file),
        ]

    async def test_disposed_listener_stops_receiving(
        self, fs: MemoryFileSystemProvider, test_root: ResourceLocator
    ):
        """Test disposing a subscription detaches the listener."""
        events: list[FileChangeEvent] = []
        subscription = fs.on_did_change_file(events.append)
        subscription.dispose()

        await fs.write_file(test_root.joinpath("f.txt"), b"1")
        assert events == []
