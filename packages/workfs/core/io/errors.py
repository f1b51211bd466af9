"""Error taxonomy for filesystem operations.

Providers translate their native failures into these types so callers can
handle every scheme the same way.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, Field

from .models import ResourceLocator


class FileSystemErrorData(BaseModel):
    """Structured data for filesystem errors.

    Args:
        code: Error kind (e.g. "FileNotFound")
        message: Human-readable error description
        locator: Entry the operation failed on (if known)
        cause: Original exception that caused this error
    """

    model_config = {"arbitrary_types_allowed": True}

    code: str
    message: str
    locator: ResourceLocator | None = None
    cause: BaseException | None = Field(default=None, repr=False)


class FileSystemError(Exception):
    """Base exception for all filesystem errors.

    Attributes:
        data: Structured error data (FileSystemErrorData)
        code: Error kind
        message: Human-readable error description
        locator: Entry the operation failed on
        cause: Original exception that caused this error
    """

    code: ClassVar[str] = "Unknown"
    default_message: ClassVar[str] = "Filesystem operation failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        locator: ResourceLocator | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.data = FileSystemErrorData(
            code=self.code,
            message=message or self.default_message,
            locator=locator,
            cause=cause,
        )
        self.message = self.data.message
        self.locator = self.data.locator
        self.cause = self.data.cause

        super().__init__(str(self))

    def __str__(self) -> str:
        parts = [self.message, self.code]
        if self.locator is not None:
            parts.append(str(self.locator))
        return " | ".join(parts)


class FileNotFound(FileSystemError):
    """No entry exists at the locator."""

    code = "FileNotFound"
    default_message = "Entry not found"


class FileExists(FileSystemError):
    """An entry already exists at the target locator."""

    code = "FileExists"
    default_message = "Entry already exists"


class FileExistsAsFile(FileSystemError):
    """A directory was requested where a file already exists."""

    code = "FileExistsAsFile"
    default_message = "A file already exists at this location"


class DirectoryNotEmpty(FileSystemError):
    """Non-recursive delete of a directory that has children."""

    code = "DirectoryNotEmpty"
    default_message = "Directory is not empty"


class FileNotADirectory(FileSystemError):
    """A directory operation was applied to a non-directory."""

    code = "FileNotADirectory"
    default_message = "Entry is not a directory"


class FileIsADirectory(FileSystemError):
    """A file operation was applied to a directory."""

    code = "FileIsADirectory"
    default_message = "Entry is a directory"


class NoPermissions(FileSystemError):
    """The operation is not permitted (read-only scheme, OS permissions)."""

    code = "NoPermissions"
    default_message = "Insufficient permissions"


class SchemeUnsupported(FileSystemError):
    """No provider is registered for the locator's scheme."""

    code = "SchemeUnsupported"
    default_message = "No filesystem provider registered for scheme"


class DecodeError(FileSystemError):
    """Content is not valid under the requested text encoding."""

    code = "DecodeError"
    default_message = "Content could not be decoded"
