"""Scheme registry acting as the backing store.

Dispatches every locator to the provider registered for its scheme, enforces
read-only schemes, and fans provider change events out to watchers.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from .errors import FileExists, FileNotFound, NoPermissions, SchemeUnsupported
from .events import Disposable, FileChangeEvent, FileSystemWatcher
from .models import FileStat, FileType, ResourceLocator
from .protocols import FileSystemProvider

logger = logging.getLogger(__name__)


@dataclass
class _Registration:
    provider: FileSystemProvider
    readonly: bool
    subscription: Disposable


class ProviderRegistry:
    """
    Backing store composed of per-scheme providers.

    Example:
        >>> registry = ProviderRegistry()
        >>> registration = registry.register_provider("memfs", MemoryFileSystemProvider())
        >>> registry.is_writable_file_system("memfs")
        True
        >>> registry.is_writable_file_system("ftp") is None
        True
    """

    def __init__(self) -> None:
        self._registrations: dict[str, _Registration] = {}
        self._watchers: list[FileSystemWatcher] = []

    def register_provider(
        self, scheme: str, provider: FileSystemProvider, *, readonly: bool = False
    ) -> Disposable:
        """
        Register a provider for a scheme.

        Args:
            scheme: Scheme served by the provider
            provider: Provider implementation
            readonly: Reject mutating operations with NoPermissions

        Returns:
            Disposable that unregisters the provider

        Raises:
            ValueError: If the scheme already has a provider
        """
        if scheme in self._registrations:
            raise ValueError(f"A provider is already registered for scheme {scheme!r}")

        subscription = provider.on_did_change_file(self._dispatch_change)
        self._registrations[scheme] = _Registration(provider, readonly, subscription)
        logger.debug("Registered %s provider for scheme %r", type(provider).__name__, scheme)

        def _unregister() -> None:
            registration = self._registrations.pop(scheme, None)
            if registration is not None:
                registration.subscription.dispose()
                logger.debug("Unregistered provider for scheme %r", scheme)

        return Disposable(_unregister)

    def _provider(self, locator: ResourceLocator) -> FileSystemProvider:
        registration = self._registrations.get(locator.scheme)
        if registration is None:
            raise SchemeUnsupported(locator=locator)
        return registration.provider

    def _writable_provider(self, locator: ResourceLocator) -> FileSystemProvider:
        provider = self._provider(locator)
        if self._registrations[locator.scheme].readonly:
            raise NoPermissions(f"Scheme {locator.scheme!r} is read-only", locator=locator)
        return provider

    def _dispatch_change(self, event: FileChangeEvent) -> None:
        for watcher in list(self._watchers):
            watcher.accept(event)

    async def stat(self, locator: ResourceLocator) -> FileStat:
        return await self._provider(locator).stat(locator)

    async def read_directory(self, locator: ResourceLocator) -> list[tuple[str, FileType]]:
        return await self._provider(locator).read_directory(locator)

    async def create_directory(self, locator: ResourceLocator) -> None:
        await self._writable_provider(locator).create_directory(locator)

    async def read_file(self, locator: ResourceLocator) -> bytes:
        return await self._provider(locator).read_file(locator)

    async def write_file(self, locator: ResourceLocator, content: bytes) -> None:
        await self._writable_provider(locator).write_file(locator, content)

    async def delete(
        self, locator: ResourceLocator, *, recursive: bool = False, use_trash: bool = False
    ) -> None:
        await self._writable_provider(locator).delete(
            locator, recursive=recursive, use_trash=use_trash
        )

    async def rename(
        self, source: ResourceLocator, target: ResourceLocator, *, overwrite: bool = False
    ) -> None:
        source_provider = self._writable_provider(source)
        target_provider = self._writable_provider(target)
        if source_provider is target_provider:
            await source_provider.rename(source, target, overwrite=overwrite)
            return

        await self._copy_across(source_provider, source, target_provider, target, overwrite)
        await source_provider.delete(source, recursive=True)

    async def copy(
        self, source: ResourceLocator, target: ResourceLocator, *, overwrite: bool = False
    ) -> None:
        source_provider = self._provider(source)
        target_provider = self._writable_provider(target)
        if source_provider is target_provider:
            await source_provider.copy(source, target, overwrite=overwrite)
            return

        await self._copy_across(source_provider, source, target_provider, target, overwrite)

    async def _copy_across(
        self,
        source_provider: FileSystemProvider,
        source: ResourceLocator,
        target_provider: FileSystemProvider,
        target: ResourceLocator,
        overwrite: bool,
    ) -> None:
        """Copy between providers by streaming bytes through this process."""
        source_stat = await source_provider.stat(source)
        try:
            await target_provider.stat(target)
        except FileNotFound:
            pass
        else:
            if not overwrite:
                raise FileExists(locator=target)
            await target_provider.delete(target, recursive=True)

        await self._copy_tree(source_provider, source, source_stat.type, target_provider, target)

    async def _copy_tree(
        self,
        source_provider: FileSystemProvider,
        source: ResourceLocator,
        kind: FileType,
        target_provider: FileSystemProvider,
        target: ResourceLocator,
    ) -> None:
        if kind & FileType.DIRECTORY:
            await target_provider.create_directory(target)
            for name, child_kind in await source_provider.read_directory(source):
                await self._copy_tree(
                    source_provider,
                    source.joinpath(name),
                    child_kind,
                    target_provider,
                    target.joinpath(name),
                )
        else:
            content = await source_provider.read_file(source)
            await target_provider.write_file(target, content)

    def is_writable_file_system(self, scheme: str) -> bool | None:
        registration = self._registrations.get(scheme)
        if registration is None:
            return None
        return not registration.readonly

    def create_watcher(
        self,
        pattern: str,
        ignore_create_events: bool = False,
        ignore_change_events: bool = False,
        ignore_delete_events: bool = False,
    ) -> FileSystemWatcher:
        def _detach() -> None:
            if watcher in self._watchers:
                self._watchers.remove(watcher)

        watcher = FileSystemWatcher(
            pattern,
            ignore_create_events=ignore_create_events,
            ignore_change_events=ignore_change_events,
            ignore_delete_events=ignore_delete_events,
            on_dispose=_detach,
        )
        self._watchers.append(watcher)
        logger.debug("Created watcher for %r", pattern)
        return watcher
