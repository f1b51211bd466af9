"""Synchronous wrapper around FileSystemFacade."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from workfs.core.io import FileAccess, FileStat, FileSystemWatcher, FileType

from .facade import Content, FileSystemFacade, PathLike


class FileSystemFacadeSync:
    """
    Synchronous wrapper around FileSystemFacade.

    Uses asyncio.run() to execute async operations in blocking mode.
    Suitable for simple scripts, tests, and non-async contexts.
    """

    def __init__(self, facade: FileSystemFacade) -> None:
        self._async_fs = facade

    def stat(self, path: PathLike) -> FileStat:
        """Retrieve metadata (blocking)."""
        return asyncio.run(self._async_fs.stat(path))

    def read_directory(self, path: PathLike) -> list[tuple[str, FileType]]:
        """List directory entries (blocking)."""
        return asyncio.run(self._async_fs.read_directory(path))

    def create_directory(self, path: PathLike) -> None:
        """Create directory and parents (blocking)."""
        asyncio.run(self._async_fs.create_directory(path))

    def read_bytes(self, path: PathLike) -> bytes:
        """Read raw content (blocking)."""
        return asyncio.run(self._async_fs.read_bytes(path))

    def read_file(
        self,
        path: PathLike,
        *,
        encoding: str = "utf-8",
        strict: bool = False,
        include_bom: bool = False,
    ) -> str:
        """Read and decode a file (blocking)."""
        return asyncio.run(
            self._async_fs.read_file(
                path, encoding=encoding, strict=strict, include_bom=include_bom
            )
        )

    def append_file(self, path: PathLike, content: Content) -> None:
        """Append content (blocking)."""
        asyncio.run(self._async_fs.append_file(path, content))

    def write_file(self, path: PathLike, content: Content) -> None:
        """Replace content (blocking)."""
        asyncio.run(self._async_fs.write_file(path, content))

    def delete(
        self, path: PathLike, *, recursive: bool = False, use_trash: bool | None = None
    ) -> None:
        """Delete an entry (blocking)."""
        asyncio.run(self._async_fs.delete(path, recursive=recursive, use_trash=use_trash))

    def rename(self, source: PathLike, target: PathLike, *, overwrite: bool = False) -> None:
        """Move an entry (blocking)."""
        asyncio.run(self._async_fs.rename(source, target, overwrite=overwrite))

    def copy(self, source: PathLike, target: PathLike, *, overwrite: bool = False) -> None:
        """Copy an entry (blocking)."""
        asyncio.run(self._async_fs.copy(source, target, overwrite=overwrite))

    def is_writable_file_system(self, scheme: str) -> bool | None:
        """Classify a scheme (sync - no I/O)."""
        return self._async_fs.is_writable_file_system(scheme)

    def exists(self, path: PathLike) -> bool:
        """Check existence (blocking)."""
        return asyncio.run(self._async_fs.exists(path))

    def truncate(self, path: PathLike, length: int = 0, *, encoding: str = "utf-8") -> None:
        """Truncate decoded text (blocking)."""
        asyncio.run(self._async_fs.truncate(path, length, encoding=encoding))

    def watch(
        self,
        pattern: str,
        *,
        ignore_create_events: bool = False,
        ignore_change_events: bool = False,
        ignore_delete_events: bool = False,
    ) -> FileSystemWatcher:
        """Create a watcher (sync - no I/O)."""
        return self._async_fs.watch(
            pattern,
            ignore_create_events=ignore_create_events,
            ignore_change_events=ignore_change_events,
            ignore_delete_events=ignore_delete_events,
        )

    def access(self, path: PathLike) -> FileAccess:
        """Classify access (sync - no I/O)."""
        return self._async_fs.access(path)

    def read_json(
        self,
        path: PathLike,
        *,
        encoding: str = "utf-8",
        throws: bool = True,
        object_hook: Callable[[dict[str, Any]], Any] | None = None,
    ) -> Any:
        """Read and parse JSON (blocking)."""
        return asyncio.run(
            self._async_fs.read_json(
                path, encoding=encoding, throws=throws, object_hook=object_hook
            )
        )

    def write_json(
        self,
        path: PathLike,
        obj: Any,
        *,
        spaces: int | str | None = None,
        eol: str = "\n",
        final_eol: bool = True,
        default: Callable[[Any], Any] | None = None,
    ) -> None:
        """Serialize and write JSON (blocking)."""
        asyncio.run(
            self._async_fs.write_json(
                path, obj, spaces=spaces, eol=eol, final_eol=final_eol, default=default
            )
        )
