"""In-memory filesystem provider for fast, isolated testing.

Simulates filesystem operations without disk I/O.
Async operations complete immediately but maintain async interface.
"""

from __future__ import annotations

from collections.abc import Callable
import copy as copy_module
from dataclasses import dataclass, field
import time

from .errors import (
    DirectoryNotEmpty,
    FileExists,
    FileExistsAsFile,
    FileIsADirectory,
    FileNotADirectory,
    FileNotFound,
    FileSystemError,
    NoPermissions,
)
from .events import Disposable, EventEmitter, FileChangeEvent, FileChangeType
from .models import FileStat, FileType, ResourceLocator


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class _Node:
    type: FileType
    ctime: int
    mtime: int
    data: bytes = b""
    children: dict[str, _Node] = field(default_factory=dict)

    @property
    def is_dir(self) -> bool:
        return self.type is FileType.DIRECTORY

    @property
    def size(self) -> int:
        return 0 if self.is_dir else len(self.data)


def _segments(locator: ResourceLocator) -> list[str]:
    return [part for part in locator.path.split("/") if part]


class MemoryFileSystemProvider:
    """
    In-memory async filesystem provider.

    Simulates a directory tree of byte files. Trash is not supported,
    ``use_trash`` deletes permanently. Authority is ignored.
    Not thread-safe (use per-test instance).
    """

    def __init__(self) -> None:
        now = _now_ms()
        self._root = _Node(FileType.DIRECTORY, now, now)
        self._on_did_change: EventEmitter[FileChangeEvent] = EventEmitter()

    def on_did_change_file(self, listener: Callable[[FileChangeEvent], None]) -> Disposable:
        return self._on_did_change.subscribe(listener)

    def _fire(self, kind: FileChangeType, locator: ResourceLocator) -> None:
        self._on_did_change.fire(FileChangeEvent(kind, locator))

    def _lookup(self, locator: ResourceLocator) -> _Node:
        node = self._root
        for part in _segments(locator):
            child = node.children.get(part) if node.is_dir else None
            if child is None:
                raise FileNotFound(locator=locator)
            node = child
        return node

    def _lookup_directory(self, locator: ResourceLocator) -> _Node:
        node = self._lookup(locator)
        if not node.is_dir:
            raise FileNotADirectory(locator=locator)
        return node

    def _ensure_directory(self, locator: ResourceLocator) -> tuple[_Node, list[ResourceLocator]]:
        """Create missing directories (sync helper); returns the node and what was created."""
        node = self._root
        current = locator.with_path("/")
        created: list[ResourceLocator] = []
        for part in _segments(locator):
            current = current.joinpath(part)
            child = node.children.get(part)
            if child is None:
                now = _now_ms()
                child = _Node(FileType.DIRECTORY, now, now)
                node.children[part] = child
                node.mtime = now
                created.append(current)
            elif not child.is_dir:
                raise FileExistsAsFile(locator=current)
            node = child
        return node, created

    async def stat(self, locator: ResourceLocator) -> FileStat:
        """Retrieve metadata (async, immediate)."""
        node = self._lookup(locator)
        return FileStat(type=node.type, ctime=node.ctime, mtime=node.mtime, size=node.size)

    async def read_directory(self, locator: ResourceLocator) -> list[tuple[str, FileType]]:
        """List children (async, immediate)."""
        node = self._lookup_directory(locator)
        return [(name, child.type) for name, child in node.children.items()]

    async def create_directory(self, locator: ResourceLocator) -> None:
        """Create directory and parents (async, immediate)."""
        _, created = self._ensure_directory(locator)
        for entry in created:
            self._fire(FileChangeType.CREATED, entry)

    async def read_file(self, locator: ResourceLocator) -> bytes:
        """Read bytes (async, immediate)."""
        node = self._lookup(locator)
        if node.is_dir:
            raise FileIsADirectory(locator=locator)
        return node.data

    async def write_file(self, locator: ResourceLocator, content: bytes) -> None:
        """Write bytes, creating parents (async, immediate)."""
        if not locator.name:
            raise FileIsADirectory(locator=locator)
        try:
            parent, created = self._ensure_directory(locator.parent)
        except FileExistsAsFile as e:
            raise FileNotADirectory(locator=e.locator) from e
        for entry in created:
            self._fire(FileChangeType.CREATED, entry)

        now = _now_ms()
        node = parent.children.get(locator.name)
        if node is None:
            parent.children[locator.name] = _Node(FileType.FILE, now, now, bytes(content))
            parent.mtime = now
            self._fire(FileChangeType.CREATED, locator)
            return
        if node.is_dir:
            raise FileIsADirectory(locator=locator)
        node.data = bytes(content)
        node.mtime = now
        self._fire(FileChangeType.CHANGED, locator)

    async def delete(
        self, locator: ResourceLocator, *, recursive: bool = False, use_trash: bool = False
    ) -> None:
        """Remove an entry (async, immediate)."""
        if not locator.name:
            raise NoPermissions("Cannot delete the root directory", locator=locator)
        parent = self._lookup_directory(locator.parent)
        node = parent.children.get(locator.name)
        if node is None:
            raise FileNotFound(locator=locator)
        if node.is_dir and node.children and not recursive:
            raise DirectoryNotEmpty(locator=locator)

        del parent.children[locator.name]
        parent.mtime = _now_ms()
        self._fire(FileChangeType.DELETED, locator)

    def _prepare_target(
        self, source: ResourceLocator, target: ResourceLocator, overwrite: bool
    ) -> tuple[_Node, _Node, bool]:
        """Validate a rename/copy and return (source node, target parent, replaced)."""
        node = self._lookup(source)
        if target.is_relative_to(source) and target != source:
            raise FileSystemError("Cannot move or copy an entry into itself", locator=target)
        if not target.name:
            raise FileExists(locator=target)

        parent, created = self._ensure_directory(target.parent)
        for entry in created:
            self._fire(FileChangeType.CREATED, entry)

        replaced = target.name in parent.children
        if replaced and not overwrite:
            raise FileExists(locator=target)
        return node, parent, replaced

    async def rename(
        self, source: ResourceLocator, target: ResourceLocator, *, overwrite: bool = False
    ) -> None:
        """Move an entry (async, immediate)."""
        if source == target:
            self._lookup(source)
            return
        node, parent, replaced = self._prepare_target(source, target, overwrite)

        del self._lookup_directory(source.parent).children[source.name]
        parent.children[target.name] = node
        parent.mtime = _now_ms()

        self._fire(FileChangeType.DELETED, source)
        self._fire(FileChangeType.CHANGED if replaced else FileChangeType.CREATED, target)

    async def copy(
        self, source: ResourceLocator, target: ResourceLocator, *, overwrite: bool = False
    ) -> None:
        """Copy an entry recursively (async, immediate)."""
        if source == target:
            raise FileExists(locator=target)
        node, parent, replaced = self._prepare_target(source, target, overwrite)

        clone = copy_module.deepcopy(node)
        clone.ctime = _now_ms()
        parent.children[target.name] = clone
        parent.mtime = clone.ctime

        self._fire(FileChangeType.CHANGED if replaced else FileChangeType.CREATED, target)
