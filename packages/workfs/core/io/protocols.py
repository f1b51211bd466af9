"""Protocols for filesystem providers and the backing store.

A provider serves one scheme. The backing store dispatches locators to
providers and owns watcher subscriptions.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from .events import Disposable, FileChangeEvent, FileSystemWatcher
from .models import FileStat, FileType, ResourceLocator


class FileSystemProvider(Protocol):
    """
    Protocol for async, per-scheme filesystem providers.

    Implementations raise the types from ``workfs.core.io.errors`` and
    report their own mutations through :meth:`on_did_change_file`.
    """

    def on_did_change_file(self, listener: Callable[[FileChangeEvent], None]) -> Disposable:
        """Subscribe to change events produced by this provider."""
        ...

    async def stat(self, locator: ResourceLocator) -> FileStat:
        """
        Retrieve entry metadata.

        Raises:
            FileNotFound: If no entry exists
        """
        ...

    async def read_directory(self, locator: ResourceLocator) -> list[tuple[str, FileType]]:
        """
        List immediate children as (name, type) pairs.

        Raises:
            FileNotFound: If the directory doesn't exist
            FileNotADirectory: If the entry is not a directory
        """
        ...

    async def create_directory(self, locator: ResourceLocator) -> None:
        """
        Create a directory and all missing ancestors.

        Raises:
            FileExistsAsFile: If a file is in the way
            NoPermissions: On permission failure
        """
        ...

    async def read_file(self, locator: ResourceLocator) -> bytes:
        """
        Read the full content of a file.

        Raises:
            FileNotFound: If the file doesn't exist
            FileIsADirectory: If the entry is a directory
        """
        ...

    async def write_file(self, locator: ResourceLocator, content: bytes) -> None:
        """
        Replace the full content of a file, creating it and its parents.

        Raises:
            FileIsADirectory: If the entry is a directory
            NoPermissions: On permission failure
        """
        ...

    async def delete(
        self, locator: ResourceLocator, *, recursive: bool = False, use_trash: bool = False
    ) -> None:
        """
        Delete a file or directory.

        Raises:
            FileNotFound: If no entry exists
            DirectoryNotEmpty: If a non-empty directory is deleted without recursive
        """
        ...

    async def rename(
        self, source: ResourceLocator, target: ResourceLocator, *, overwrite: bool = False
    ) -> None:
        """
        Move an entry.

        Raises:
            FileNotFound: If the source doesn't exist
            FileExists: If the target exists and overwrite is False
        """
        ...

    async def copy(
        self, source: ResourceLocator, target: ResourceLocator, *, overwrite: bool = False
    ) -> None:
        """
        Copy an entry (directories recursively).

        Raises:
            FileNotFound: If the source doesn't exist
            FileExists: If the target exists and overwrite is False
        """
        ...


class BackingStore(Protocol):
    """
    Protocol for the capability set the facade delegates to.

    Mirrors :class:`FileSystemProvider` for all locators regardless of scheme,
    plus scheme classification and watcher creation.
    """

    async def stat(self, locator: ResourceLocator) -> FileStat: ...

    async def read_directory(self, locator: ResourceLocator) -> list[tuple[str, FileType]]: ...

    async def create_directory(self, locator: ResourceLocator) -> None: ...

    async def read_file(self, locator: ResourceLocator) -> bytes: ...

    async def write_file(self, locator: ResourceLocator, content: bytes) -> None: ...

    async def delete(
        self, locator: ResourceLocator, *, recursive: bool = False, use_trash: bool = False
    ) -> None: ...

    async def rename(
        self, source: ResourceLocator, target: ResourceLocator, *, overwrite: bool = False
    ) -> None: ...

    async def copy(
        self, source: ResourceLocator, target: ResourceLocator, *, overwrite: bool = False
    ) -> None: ...

    def is_writable_file_system(self, scheme: str) -> bool | None:
        """
        Classify a scheme.

        Returns:
            True if writable, False if read-only, None if no provider is registered
        """
        ...

    def create_watcher(
        self,
        pattern: str,
        ignore_create_events: bool = False,
        ignore_change_events: bool = False,
        ignore_delete_events: bool = False,
    ) -> FileSystemWatcher:
        """Create a watcher for entries matching a glob pattern."""
        ...
