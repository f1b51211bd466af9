"""Text/byte conversion for file content."""

from __future__ import annotations

import codecs

# Byte order marks by normalized codec name
_BOMS: dict[str, bytes] = {
    "utf-8": codecs.BOM_UTF8,
    "utf-16-le": codecs.BOM_UTF16_LE,
    "utf-16-be": codecs.BOM_UTF16_BE,
    "utf-32-le": codecs.BOM_UTF32_LE,
    "utf-32-be": codecs.BOM_UTF32_BE,
}


def encode_content(content: str | bytes | bytearray | memoryview) -> bytes:
    """Text is encoded as UTF-8; byte buffers pass through."""
    if isinstance(content, str):
        return content.encode("utf-8")
    return bytes(content)


def _resolve_codec(encoding: str, data: bytes) -> str:
    """Normalize the codec name, pinning endianness for BOM-sniffing codecs.

    Raises:
        LookupError: If the encoding is unknown
    """
    name = codecs.lookup(encoding).name
    if name in ("utf-16", "utf-32"):
        big_endian = _BOMS[f"{name}-be"]
        # little-endian unless a big-endian BOM says otherwise
        return f"{name}-be" if data.startswith(big_endian) else f"{name}-le"
    return name


def decode_content(
    data: bytes,
    encoding: str = "utf-8",
    *,
    strict: bool = False,
    include_bom: bool = False,
) -> str:
    """
    Decode file bytes.

    Args:
        data: Raw content
        encoding: Text encoding name
        strict: Raise on invalid sequences instead of substituting U+FFFD
        include_bom: Keep a leading byte order mark in the result

    Raises:
        LookupError: If the encoding is unknown
        UnicodeDecodeError: If strict and the bytes are invalid
    """
    name = _resolve_codec(encoding, data)
    bom = _BOMS.get(name)
    if bom is not None and not include_bom and data.startswith(bom):
        data = data[len(bom) :]
    return data.decode(name, "strict" if strict else "replace")


def truncate_content(data: bytes, length: int, encoding: str = "utf-8") -> bytes:
    """
    Keep the first ``length`` characters of the decoded text.

    The prefix is re-encoded with the codec it was decoded with, and a leading
    byte order mark is kept. Invalid sequences are replaced.

    Raises:
        LookupError: If the encoding is unknown
    """
    name = _resolve_codec(encoding, data)
    bom = _BOMS.get(name, b"")
    if not bom or not data.startswith(bom):
        bom = b""
    text = data[len(bom) :].decode(name, "replace")
    return bom + text[:length].encode(name, "replace")
