"""Change events and watcher subscriptions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
import logging
from typing import Generic, TypeVar

from .models import ResourceLocator
from .utils import compile_glob

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FileChangeType(IntEnum):
    """Kind of change reported for an entry."""

    CREATED = 1
    CHANGED = 2
    DELETED = 3


@dataclass(frozen=True)
class FileChangeEvent:
    """A single change to one entry."""

    type: FileChangeType
    locator: ResourceLocator


class Disposable:
    """Handle that releases a subscription exactly once.

    Usable as a context manager.
    """

    def __init__(self, on_dispose: Callable[[], None]) -> None:
        self._on_dispose: Callable[[], None] | None = on_dispose

    @property
    def disposed(self) -> bool:
        return self._on_dispose is None

    def dispose(self) -> None:
        callback, self._on_dispose = self._on_dispose, None
        if callback is not None:
            callback()

    def __enter__(self) -> Disposable:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class EventEmitter(Generic[T]):
    """Synchronous listener list.

    A listener that raises is logged and does not stop delivery to the others.
    """

    def __init__(self) -> None:
        self._listeners: list[Callable[[T], None]] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Callable[[T], None]) -> Disposable:
        """Register a listener; dispose the result to unregister."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Disposable(_remove)

    def fire(self, event: T) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Event listener %r failed", listener)

    def clear(self) -> None:
        self._listeners.clear()


class FileSystemWatcher(Disposable):
    """Live subscription to changes of entries matching a glob pattern.

    Raises ValueError at construction when the pattern is malformed.
    Owned by the caller until :meth:`dispose` is called.
    """

    def __init__(
        self,
        pattern: str,
        *,
        ignore_create_events: bool = False,
        ignore_change_events: bool = False,
        ignore_delete_events: bool = False,
        on_dispose: Callable[[], None] | None = None,
    ) -> None:
        self.pattern = pattern
        self.glob = compile_glob(pattern)
        self.ignore_create_events = ignore_create_events
        self.ignore_change_events = ignore_change_events
        self.ignore_delete_events = ignore_delete_events
        self._created: EventEmitter[ResourceLocator] = EventEmitter()
        self._changed: EventEmitter[ResourceLocator] = EventEmitter()
        self._deleted: EventEmitter[ResourceLocator] = EventEmitter()
        self._detach = on_dispose
        super().__init__(self._release)

    def on_did_create(self, listener: Callable[[ResourceLocator], None]) -> Disposable:
        return self._created.subscribe(listener)

    def on_did_change(self, listener: Callable[[ResourceLocator], None]) -> Disposable:
        return self._changed.subscribe(listener)

    def on_did_delete(self, listener: Callable[[ResourceLocator], None]) -> Disposable:
        return self._deleted.subscribe(listener)

    def accept(self, event: FileChangeEvent) -> None:
        """Route a change event to listeners if it matches and is not ignored."""
        if self.disposed or not self.glob.match(event.locator):
            return
        if event.type is FileChangeType.CREATED and not self.ignore_create_events:
            self._created.fire(event.locator)
        elif event.type is FileChangeType.CHANGED and not self.ignore_change_events:
            self._changed.fire(event.locator)
        elif event.type is FileChangeType.DELETED and not self.ignore_delete_events:
            self._deleted.fire(event.locator)

    def _release(self) -> None:
        for emitter in (self._created, self._changed, self._deleted):
            emitter.clear()
        if self._detach is not None:
            self._detach()
