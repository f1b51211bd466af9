"""Asynchronous file facade over a backing store.

Normalizes string paths into locators, converts between text and bytes, and
delegates every call to the backing store in a single round-trip.
"""

from __future__ import annotations

from collections.abc import Callable
import json
import logging
from typing import Any

from workfs.core.config.models import AppConfig, FacadeConfig
from workfs.core.io import (
    FILE_SCHEME,
    BackingStore,
    DecodeError,
    FileAccess,
    FileStat,
    FileSystemError,
    FileSystemWatcher,
    FileType,
    LocalFileSystemProvider,
    MemoryFileSystemProvider,
    ProviderRegistry,
    ResourceLocator,
)
from workfs.core.utils.logging import log_operation

from .codec import decode_content, encode_content, truncate_content

logger = logging.getLogger(__name__)

PathLike = str | ResourceLocator
Content = str | bytes | bytearray | memoryview


class FileSystemFacade:
    """
    Uniform async file operations over local and remote schemes.

    Holds no state besides its collaborators; every call is one request
    against the backing store. ``append_file`` and ``truncate`` are
    read-then-write pairs and are not atomic: a concurrent writer between
    the read and the write is overwritten.

    Example:
        >>> facade = create_default_facade()
        >>> await facade.write_file("/tmp/x.txt", "abc")
        >>> await facade.append_file("/tmp/x.txt", "def")
        >>> await facade.read_file("/tmp/x.txt")
        'abcdef'
    """

    def __init__(self, store: BackingStore, config: FacadeConfig | None = None) -> None:
        """
        Initialize the facade.

        Args:
            store: Backing store the operations delegate to
            config: Facade defaults (scheme for plain paths, trash)
        """
        self.store = store
        self.config = config or FacadeConfig()

    def locator(self, path: PathLike) -> ResourceLocator:
        """Normalize caller input into a locator (sync - no I/O)."""
        if isinstance(path, ResourceLocator):
            return path
        return ResourceLocator.from_string(path, default_scheme=self.config.default_scheme)

    @log_operation
    async def stat(self, path: PathLike) -> FileStat:
        """
        Retrieve entry metadata.

        Raises:
            FileNotFound: If no entry exists
            SchemeUnsupported: If no provider serves the scheme
        """
        return await self.store.stat(self.locator(path))

    @log_operation
    async def read_directory(self, path: PathLike) -> list[tuple[str, FileType]]:
        """
        List the immediate children of a directory as (name, type) pairs.

        Order is provider-defined.
        """
        return await self.store.read_directory(self.locator(path))

    @log_operation
    async def create_directory(self, path: PathLike) -> None:
        """Create a directory and any missing ancestors."""
        await self.store.create_directory(self.locator(path))

    @log_operation
    async def read_bytes(self, path: PathLike) -> bytes:
        """Read the raw content of a file."""
        return await self.store.read_file(self.locator(path))

    @log_operation
    async def read_file(
        self,
        path: PathLike,
        *,
        encoding: str = "utf-8",
        strict: bool = False,
        include_bom: bool = False,
    ) -> str:
        """
        Read and decode the full content of a file.

        Args:
            path: File path or locator
            encoding: Text encoding
            strict: Raise DecodeError on invalid sequences instead of replacing them
            include_bom: Keep a leading byte order mark in the result

        Returns:
            The decoded text

        Raises:
            FileNotFound: If the file doesn't exist
            DecodeError: If strict and the content is invalid for the encoding
            LookupError: If the encoding is unknown
        """
        locator = self.locator(path)
        content = await self.store.read_file(locator)
        try:
            return decode_content(content, encoding, strict=strict, include_bom=include_bom)
        except UnicodeDecodeError as e:
            raise DecodeError(str(e), locator=locator, cause=e) from e

    @log_operation
    async def append_file(self, path: PathLike, content: Content) -> None:
        """
        Append content to a file, creating it when missing.

        Reads the existing bytes and writes back the concatenation.
        """
        locator = self.locator(path)
        existing = b""
        if await self.exists(locator):
            existing = await self.store.read_file(locator)
        await self.store.write_file(locator, existing + encode_content(content))

    @log_operation
    async def write_file(self, path: PathLike, content: Content) -> None:
        """Replace the full content of a file. Text is written as UTF-8."""
        await self.store.write_file(self.locator(path), encode_content(content))

    @log_operation
    async def delete(
        self,
        path: PathLike,
        *,
        recursive: bool = False,
        use_trash: bool | None = None,
    ) -> None:
        """
        Delete a file or directory.

        Args:
            path: Entry to delete
            recursive: Delete non-empty directories
            use_trash: Move to the trash (defaults to the configured value)

        Raises:
            FileNotFound: If no entry exists
            DirectoryNotEmpty: If the directory has children and recursive is False
        """
        await self.store.delete(
            self.locator(path),
            recursive=recursive,
            use_trash=self.config.use_trash if use_trash is None else use_trash,
        )

    @log_operation
    async def rename(self, source: PathLike, target: PathLike, *, overwrite: bool = False) -> None:
        """
        Move an entry to a new location.

        Raises:
            FileNotFound: If the source doesn't exist
            FileExists: If the target exists and overwrite is False
        """
        await self.store.rename(self.locator(source), self.locator(target), overwrite=overwrite)

    @log_operation
    async def copy(self, source: PathLike, target: PathLike, *, overwrite: bool = False) -> None:
        """
        Copy an entry, directories recursively.

        Raises:
            FileNotFound: If the source doesn't exist
            FileExists: If the target exists and overwrite is False
        """
        await self.store.copy(self.locator(source), self.locator(target), overwrite=overwrite)

    def is_writable_file_system(self, scheme: str) -> bool | None:
        """
        Check if a scheme supports writing.

        Returns:
            True if writable, False if read-only, None if the scheme is unknown
        """
        return self.store.is_writable_file_system(scheme)

    async def exists(self, path: PathLike) -> bool:
        """Check whether an entry exists. Never raises for filesystem errors or malformed input."""
        try:
            await self.store.stat(self.locator(path))
        except (FileSystemError, ValueError):
            return False
        return True

    @log_operation
    async def truncate(self, path: PathLike, length: int = 0, *, encoding: str = "utf-8") -> None:
        """
        Cut a file down to the first ``length`` characters of its decoded text.

        The kept text is written back in ``encoding``, so non-UTF-8 files keep
        their encoding and byte order mark. Failures are logged and re-raised.

        Raises:
            ValueError: If length is negative
            FileNotFound: If the file doesn't exist
            LookupError: If the encoding is unknown
        """
        if length < 0:
            raise ValueError(f"Truncation length must be >= 0, got {length}")
        locator = self.locator(path)
        try:
            content = await self.store.read_file(locator)
            await self.store.write_file(locator, truncate_content(content, length, encoding))
        except FileSystemError:
            logger.error("Failed to truncate %s to %d characters", locator, length)
            raise

    def watch(
        self,
        pattern: str,
        *,
        ignore_create_events: bool = False,
        ignore_change_events: bool = False,
        ignore_delete_events: bool = False,
    ) -> FileSystemWatcher:
        """
        Watch entries matching a glob pattern.

        The caller owns the returned watcher and must dispose it.
        """
        return self.store.create_watcher(
            pattern, ignore_create_events, ignore_change_events, ignore_delete_events
        )

    def access(self, path: PathLike) -> FileAccess:
        """Classify the access the scheme of ``path`` allows. Never raises."""
        try:
            writable = self.is_writable_file_system(self.locator(path).scheme)
        except ValueError:
            return FileAccess.NONE
        if writable is None:
            return FileAccess.NONE
        return FileAccess.WRITE if writable else FileAccess.READ

    @log_operation
    async def read_json(
        self,
        path: PathLike,
        *,
        encoding: str = "utf-8",
        throws: bool = True,
        object_hook: Callable[[dict[str, Any]], Any] | None = None,
    ) -> Any:
        """
        Read a file and parse it as JSON.

        Args:
            path: File path or locator
            encoding: Text encoding
            throws: Raise on invalid JSON; when False, return None instead
            object_hook: Called with every decoded object, as in json.loads

        Raises:
            FileNotFound: If the file doesn't exist
            json.JSONDecodeError: If the content is not JSON and throws is True
        """
        text = await self.read_file(path, encoding=encoding)
        try:
            return json.loads(text, object_hook=object_hook)
        except json.JSONDecodeError:
            if throws:
                raise
            logger.debug("Ignoring invalid JSON in %s", self.locator(path))
            return None

    @log_operation
    async def write_json(
        self,
        path: PathLike,
        obj: Any,
        *,
        spaces: int | str | None = None,
        eol: str = "\n",
        final_eol: bool = True,
        default: Callable[[Any], Any] | None = None,
    ) -> None:
        """
        Serialize an object as JSON and write it to a file.

        Args:
            path: File path or locator
            obj: JSON-serializable object
            spaces: Indentation (number of spaces or an indent string)
            eol: Line separator
            final_eol: Terminate the document with ``eol``
            default: Serializer for values json can't handle
        """
        text = json.dumps(obj, indent=spaces, default=default, ensure_ascii=False)
        if eol != "\n":
            text = text.replace("\n", eol)
        if final_eol:
            text += eol
        await self.write_file(path, text)


def create_default_facade(config: AppConfig | None = None) -> FileSystemFacade:
    """
    Build a facade with the local disk on ``file`` and an in-memory provider.

    Args:
        config: Application config (defaults apply when omitted)
    """
    config = config or AppConfig()
    registry = ProviderRegistry()
    registry.register_provider(
        FILE_SCHEME,
        LocalFileSystemProvider(),
        readonly=FILE_SCHEME in config.readonly_schemes,
    )
    registry.register_provider(
        config.memory_scheme,
        MemoryFileSystemProvider(),
        readonly=config.memory_scheme in config.readonly_schemes,
    )
    return FileSystemFacade(registry, config.facade)


__all__ = ["FileSystemFacade", "create_default_facade"]
