"""Models for the virtual filesystem layer.

Provides the locator type used to address entries across schemes, plus the
metadata and access types returned by providers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag
import os
import posixpath
import re
from urllib.parse import quote, unquote, urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Scheme prefix recognised in plain strings. Two characters minimum so that
# Windows drive letters ("C:\\...") stay local paths.
_SCHEME_PREFIX = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]+):")

FILE_SCHEME = "file"


class FileType(IntFlag):
    """Kind of a filesystem entry.

    Symbolic links are reported combined with the kind of their target,
    e.g. ``FileType.FILE | FileType.SYMBOLIC_LINK``.
    """

    UNKNOWN = 0
    FILE = 1
    DIRECTORY = 2
    SYMBOLIC_LINK = 64


class FileAccess(IntEnum):
    """Access capability of the scheme backing a locator."""

    NONE = 0
    READ = 1
    WRITE = 2


@dataclass(frozen=True)
class FileStat:
    """Metadata snapshot of one entry.

    Attributes:
        type: Entry kind
        ctime: Creation time, milliseconds since the epoch
        mtime: Last modification time, milliseconds since the epoch
        size: Size in bytes
    """

    type: FileType
    ctime: int
    mtime: int
    size: int


class ResourceLocator(BaseModel):
    """Scheme-qualified address of a filesystem entry.

    Immutable; build one with :meth:`file`, :meth:`parse` or
    :meth:`from_string`.

    Example:
        >>> loc = ResourceLocator.file("/tmp/notes.txt")
        >>> str(loc)
        'file:///tmp/notes.txt'
        >>> ResourceLocator.parse("memfs:/data/a.txt").scheme
        'memfs'
    """

    model_config = ConfigDict(frozen=True)

    scheme: str = Field(pattern=r"^[a-zA-Z][a-zA-Z0-9+.-]*$", description="Addressing scheme")
    authority: str = Field(default="", description="Authority (host) component")
    path: str = Field(default="/", description="Absolute POSIX path")

    @field_validator("path")
    @classmethod
    def _normalize_path(cls, value: str) -> str:
        if not value.startswith("/"):
            value = "/" + value
        normalized = posixpath.normpath(value)
        # normpath keeps a leading double slash
        if normalized.startswith("//"):
            normalized = "/" + normalized.lstrip("/")
        return normalized

    @classmethod
    def file(cls, path: str | os.PathLike[str]) -> ResourceLocator:
        """Build a ``file`` locator from a local path.

        Relative paths are made absolute against the current directory.
        """
        absolute = os.path.abspath(os.path.expanduser(os.fspath(path)))
        return cls(scheme=FILE_SCHEME, path=absolute.replace(os.sep, "/"))

    @classmethod
    def parse(cls, text: str) -> ResourceLocator:
        """Parse URI text (``scheme://authority/path`` or ``scheme:/path``).

        Raises:
            ValueError: If the text has no scheme
        """
        parts = urlsplit(text)
        if not parts.scheme:
            raise ValueError(f"Locator has no scheme: {text!r}")
        return cls(scheme=parts.scheme, authority=parts.netloc, path=unquote(parts.path) or "/")

    @classmethod
    def from_string(cls, text: str, default_scheme: str = FILE_SCHEME) -> ResourceLocator:
        """Convert caller input into a locator.

        Text with an explicit scheme prefix is parsed as a URI; anything else
        is an absolute local path under ``default_scheme``.
        """
        if _SCHEME_PREFIX.match(text):
            return cls.parse(text)
        if default_scheme == FILE_SCHEME:
            return cls.file(text)
        return cls(scheme=default_scheme, path=text)

    @property
    def name(self) -> str:
        """Final path segment ('' for the root)."""
        return posixpath.basename(self.path)

    @property
    def parent(self) -> ResourceLocator:
        """Locator of the containing directory (the root is its own parent)."""
        return self.with_path(posixpath.dirname(self.path))

    def with_path(self, path: str) -> ResourceLocator:
        """Same scheme and authority, different path."""
        return ResourceLocator(scheme=self.scheme, authority=self.authority, path=path)

    def joinpath(self, *parts: str) -> ResourceLocator:
        """Append path segments."""
        return self.with_path(posixpath.join(self.path, *parts))

    def is_relative_to(self, other: ResourceLocator) -> bool:
        """True if this locator equals ``other`` or lives underneath it."""
        if (self.scheme, self.authority) != (other.scheme, other.authority):
            return False
        if other.path == "/":
            return True
        return self.path == other.path or self.path.startswith(other.path + "/")

    def __str__(self) -> str:
        return f"{self.scheme}://{self.authority}{quote(self.path, safe='/:@')}"
