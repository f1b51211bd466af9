"""File facade for workfs.

Safe, uniform, async-first file operations across schemes with a sync
convenience wrapper.

Example (async):
    >>> from workfs.core.fs import create_default_facade
    >>> fs = create_default_facade()
    >>> await fs.write_file("/tmp/x.txt", "abc")
    >>> await fs.read_file("/tmp/x.txt")
    'abc'

Example (sync):
    >>> from workfs.core.fs import FileSystemFacadeSync, create_default_facade
    >>> fs = FileSystemFacadeSync(create_default_facade())
    >>> fs.write_file("memfs:/x.txt", "abc")
    >>> fs.exists("memfs:/x.txt")
    True
"""

from .codec import decode_content, encode_content
from .facade import Content, FileSystemFacade, PathLike, create_default_facade
from .sync import FileSystemFacadeSync

__all__ = [
    "Content",
    "PathLike",
    "FileSystemFacade",
    "FileSystemFacadeSync",
    "create_default_facade",
    "decode_content",
    "encode_content",
]
