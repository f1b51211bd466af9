"""Virtual filesystem layer for workfs.

Provides locators, per-scheme providers and the scheme registry that
backs the file facade.

Example:
    >>> from workfs.core.io import MemoryFileSystemProvider, ProviderRegistry, ResourceLocator
    >>> registry = ProviderRegistry()
    >>> registration = registry.register_provider("memfs", MemoryFileSystemProvider())
    >>> loc = ResourceLocator.parse("memfs:/notes/today.txt")
    >>> await registry.write_file(loc, b"hello")
    >>> await registry.read_file(loc)
    b'hello'
"""

from .errors import (
    DecodeError,
    DirectoryNotEmpty,
    FileExists,
    FileExistsAsFile,
    FileIsADirectory,
    FileNotADirectory,
    FileNotFound,
    FileSystemError,
    FileSystemErrorData,
    NoPermissions,
    SchemeUnsupported,
)
from .events import (
    Disposable,
    EventEmitter,
    FileChangeEvent,
    FileChangeType,
    FileSystemWatcher,
)
from .impl_fake import MemoryFileSystemProvider
from .impl_real import LocalFileSystemProvider
from .models import FILE_SCHEME, FileAccess, FileStat, FileType, ResourceLocator
from .protocols import BackingStore, FileSystemProvider
from .registry import ProviderRegistry
from .utils import GlobPattern, compile_glob, match_glob

__all__ = [
    # Locators and metadata
    "FILE_SCHEME",
    "ResourceLocator",
    "FileType",
    "FileStat",
    "FileAccess",
    # Errors
    "FileSystemError",
    "FileSystemErrorData",
    "FileNotFound",
    "FileExists",
    "FileExistsAsFile",
    "DirectoryNotEmpty",
    "FileNotADirectory",
    "FileIsADirectory",
    "NoPermissions",
    "SchemeUnsupported",
    "DecodeError",
    # Events
    "Disposable",
    "EventEmitter",
    "FileChangeEvent",
    "FileChangeType",
    "FileSystemWatcher",
    # Protocols
    "FileSystemProvider",
    "BackingStore",
    # Implementations
    "LocalFileSystemProvider",
    "MemoryFileSystemProvider",
    "ProviderRegistry",
    # Utilities
    "GlobPattern",
    "compile_glob",
    "match_glob",
]
