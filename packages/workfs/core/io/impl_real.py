"""Local disk provider using aiofiles for async I/O.

Provides atomic writes via temp file + os.replace().
Async-first with high-performance non-blocking I/O.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterator
import contextlib
import errno
import os
from pathlib import Path
import shutil
import stat as stat_module
from tempfile import NamedTemporaryFile

import aiofiles  # type: ignore[import-untyped]
import aiofiles.os  # type: ignore[import-untyped]
from send2trash import send2trash

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


@contextlib.contextmanager
def translate_os_errors(locator: ResourceLocator) -> Iterator[None]:
    """Re-raise OS errors as filesystem errors for ``locator``."""
    try:
        yield
    except FileSystemError:
        raise
    except FileNotFoundError as e:
        raise FileNotFound(locator=locator, cause=e) from e
    except FileExistsError as e:
        raise FileExists(locator=locator, cause=e) from e
    except IsADirectoryError as e:
        raise FileIsADirectory(locator=locator, cause=e) from e
    except NotADirectoryError as e:
        raise FileNotADirectory(locator=locator, cause=e) from e
    except PermissionError as e:
        raise NoPermissions(locator=locator, cause=e) from e
    except OSError as e:
        if e.errno == errno.ENOTEMPTY:
            raise DirectoryNotEmpty(locator=locator, cause=e) from e
        raise FileSystemError(str(e), locator=locator, cause=e) from e
    except ValueError as e:
        # paths the OS can't represent, e.g. embedded NUL bytes
        raise FileSystemError(str(e), locator=locator, cause=e) from e


def _file_type(mode: int) -> FileType:
    if stat_module.S_ISREG(mode):
        return FileType.FILE
    if stat_module.S_ISDIR(mode):
        return FileType.DIRECTORY
    return FileType.UNKNOWN


def _to_ms(seconds: float) -> int:
    return int(seconds * 1000)


class LocalFileSystemProvider:
    """
    Local disk provider using aiofiles for async I/O.

    Writes are atomic (temp file + replace). Change events are reported for
    mutations made through this provider only.
    """

    def __init__(self) -> None:
        self._on_did_change: EventEmitter[FileChangeEvent] = EventEmitter()

    def on_did_change_file(self, listener: Callable[[FileChangeEvent], None]) -> Disposable:
        return self._on_did_change.subscribe(listener)

    def _fire(self, kind: FileChangeType, locator: ResourceLocator) -> None:
        self._on_did_change.fire(FileChangeEvent(kind, locator))

    @staticmethod
    def to_path(locator: ResourceLocator) -> Path:
        """Map a locator to a local path (sync - no I/O)."""
        if locator.authority:
            return Path(f"//{locator.authority}{locator.path}")
        return Path(locator.path)

    async def _exists(self, path: Path) -> bool:
        return bool(await aiofiles.os.path.exists(path) or await aiofiles.os.path.islink(path))

    async def stat(self, locator: ResourceLocator) -> FileStat:
        """Retrieve metadata asynchronously; symlinks report their target kind."""
        path = self.to_path(locator)
        with translate_os_errors(locator):
            st = await aiofiles.os.stat(path, follow_symlinks=False)

        kind = _file_type(st.st_mode)
        if stat_module.S_ISLNK(st.st_mode):
            try:
                st = await aiofiles.os.stat(path)
                kind = _file_type(st.st_mode) | FileType.SYMBOLIC_LINK
            except FileNotFoundError:
                # dangling link
                kind = FileType.UNKNOWN | FileType.SYMBOLIC_LINK

        ctime = getattr(st, "st_birthtime", st.st_ctime)
        return FileStat(type=kind, ctime=_to_ms(ctime), mtime=_to_ms(st.st_mtime), size=st.st_size)

    async def read_directory(self, locator: ResourceLocator) -> list[tuple[str, FileType]]:
        """List directory contents asynchronously."""
        with translate_os_errors(locator):
            names: list[str] = await aiofiles.os.listdir(self.to_path(locator))

        async def _entry(name: str) -> tuple[str, FileType]:
            try:
                return name, (await self.stat(locator.joinpath(name))).type
            except FileNotFound:
                # removed while listing
                return name, FileType.UNKNOWN

        return list(await asyncio.gather(*(_entry(name) for name in names)))

    async def create_directory(self, locator: ResourceLocator) -> None:
        """Create directory and parents asynchronously."""
        path = self.to_path(locator)
        existed = await self._exists(path)
        try:
            with translate_os_errors(locator):
                await aiofiles.os.makedirs(path, exist_ok=True)
        except (FileExists, FileNotADirectory) as e:
            raise FileExistsAsFile(locator=locator, cause=e.cause) from e
        if not existed:
            self._fire(FileChangeType.CREATED, locator)

    async def read_file(self, locator: ResourceLocator) -> bytes:
        """Read file bytes asynchronously."""
        with translate_os_errors(locator):
            async with aiofiles.open(self.to_path(locator), mode="rb") as f:
                content: bytes = await f.read()
                return content

    async def write_file(self, locator: ResourceLocator, content: bytes) -> None:
        """Atomically replace file content asynchronously."""
        path = self.to_path(locator)

        with translate_os_errors(locator):
            if await aiofiles.os.path.isdir(path):
                raise FileIsADirectory(locator=locator)
            existed = await self._exists(path)

            # Ensure parent directory exists
            try:
                await aiofiles.os.makedirs(path.parent, exist_ok=True)
            except FileExistsError as e:
                raise FileNotADirectory(locator=locator.parent, cause=e) from e

            # Atomic write: temp file → replace
            loop = asyncio.get_running_loop()

            def create_temp_file() -> str:
                tmp = NamedTemporaryFile(mode="wb", dir=path.parent, delete=False)
                tmp_path = tmp.name
                tmp.close()
                return tmp_path

            tmp_path = await loop.run_in_executor(None, create_temp_file)

            try:
                async with aiofiles.open(tmp_path, mode="wb") as f:
                    await f.write(content)
                await loop.run_in_executor(None, os.replace, tmp_path, str(path))
            except BaseException:
                # Clean up temp on failure
                with contextlib.suppress(OSError):
                    await aiofiles.os.unlink(tmp_path)
                raise

        self._fire(FileChangeType.CHANGED if existed else FileChangeType.CREATED, locator)

    async def delete(
        self, locator: ResourceLocator, *, recursive: bool = False, use_trash: bool = False
    ) -> None:
        """Remove a file or directory asynchronously."""
        path = self.to_path(locator)
        loop = asyncio.get_running_loop()

        with translate_os_errors(locator):
            st = await aiofiles.os.stat(path, follow_symlinks=False)
            is_dir = stat_module.S_ISDIR(st.st_mode)
            if is_dir and not recursive and await aiofiles.os.listdir(path):
                raise DirectoryNotEmpty(locator=locator)

            if use_trash:
                # send2trash is blocking, run in executor
                await loop.run_in_executor(None, send2trash, str(path))
            elif is_dir and recursive:
                await loop.run_in_executor(None, shutil.rmtree, str(path))
            elif is_dir:
                await aiofiles.os.rmdir(path)
            else:
                await aiofiles.os.unlink(path)

        self._fire(FileChangeType.DELETED, locator)

    async def _prepare_target(
        self, source: ResourceLocator, target: ResourceLocator, overwrite: bool
    ) -> bool:
        """Validate a rename/copy, clearing the target when overwriting. Returns replaced."""
        source_path = self.to_path(source)
        target_path = self.to_path(target)

        with translate_os_errors(source):
            await aiofiles.os.stat(source_path, follow_symlinks=False)
        if target.is_relative_to(source) and target != source:
            raise FileSystemError("Cannot move or copy an entry into itself", locator=target)

        replaced = await self._exists(target_path)
        if replaced and not overwrite:
            raise FileExists(locator=target)

        with translate_os_errors(target):
            if replaced:
                if await aiofiles.os.path.isdir(target_path) and not await aiofiles.os.path.islink(
                    target_path
                ):
                    loop = asyncio.get_running_loop()
                    await loop.run_in_executor(None, shutil.rmtree, str(target_path))
                else:
                    await aiofiles.os.unlink(target_path)
            await aiofiles.os.makedirs(target_path.parent, exist_ok=True)
        return replaced

    async def rename(
        self, source: ResourceLocator, target: ResourceLocator, *, overwrite: bool = False
    ) -> None:
        """Move an entry asynchronously."""
        if source == target:
            await self.stat(source)
            return
        replaced = await self._prepare_target(source, target, overwrite)
        with translate_os_errors(source):
            await aiofiles.os.rename(self.to_path(source), self.to_path(target))

        self._fire(FileChangeType.DELETED, source)
        self._fire(FileChangeType.CHANGED if replaced else FileChangeType.CREATED, target)

    async def copy(
        self, source: ResourceLocator, target: ResourceLocator, *, overwrite: bool = False
    ) -> None:
        """Copy an entry asynchronously (shutil is blocking, run in executor)."""
        if source == target:
            raise FileExists(locator=target)
        replaced = await self._prepare_target(source, target, overwrite)

        source_path = str(self.to_path(source))
        target_path = str(self.to_path(target))
        loop = asyncio.get_running_loop()
        with translate_os_errors(source):
            if await aiofiles.os.path.isdir(source_path):
                await loop.run_in_executor(
                    None, lambda: shutil.copytree(source_path, target_path, symlinks=True)
                )
            else:
                await loop.run_in_executor(None, shutil.copy2, source_path, target_path)

        self._fire(FileChangeType.CHANGED if replaced else FileChangeType.CREATED, target)
