"""Text file reading and writing that preserves the original encoding.

Template files are read with byte order mark detection and written back with exactly
the encoding (and byte order mark) they were read with.
"""

import codecs
from pathlib import Path
from typing import NamedTuple, Tuple

from apidocprep.types import PathType


class TextEncoding(NamedTuple):
    """An encoding together with the byte order mark written before the text.

    Attributes:
        name: Python codec name used to decode and encode the text body.
        bom: Byte order mark bytes, or ``b""`` if the file has none.
    """

    name: str
    bom: bytes = b""


# Order matters: the UTF-32 LE mark starts with the UTF-16 LE mark
BYTE_ORDER_MARKS = (
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


def detect_encoding(raw: bytes, default: str = "utf-8") -> TextEncoding:
    """Detect the encoding of raw file content from its byte order mark.

    Args:
        raw: The raw file content, or at least its first four bytes.
        default: Codec name to use when no byte order mark is present.

    Returns:
        The detected encoding.

    Example:
        >>> detect_encoding(codecs.BOM_UTF16_LE + "hi".encode("utf-16-le"))
        TextEncoding(name='utf-16-le', bom=b'\\xff\\xfe')
        >>> detect_encoding(b"plain", "cp1252")
        TextEncoding(name='cp1252', bom=b'')
    """
    for bom, name in BYTE_ORDER_MARKS:
        if raw.startswith(bom):
            return TextEncoding(name, bom)
    return TextEncoding(codecs.lookup(default).name, b"")


def read_with_encoding(path: PathType, default: str = "utf-8") -> Tuple[str, TextEncoding]:
    """Read a text file, detecting its encoding from a byte order mark if present.

    The file is read in binary mode so that line endings are preserved exactly.

    Args:
        path: The file to read.
        default: Codec name to use when the file has no byte order mark.

    Returns:
        A tuple of the decoded text (without the byte order mark) and its encoding.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the content is not valid in the detected encoding.
    """
    raw = Path(path).read_bytes()
    encoding = detect_encoding(raw, default)
    return raw[len(encoding.bom) :].decode(encoding.name), encoding  # noqa: E203


def write_with_encoding(path: PathType, text: str, encoding: TextEncoding) -> None:
    """Write text to a file using the given encoding and byte order mark.

    Raises:
        OSError: If the file cannot be written.
        UnicodeEncodeError: If the text cannot be represented in the encoding.
    """
    with open(path, "wb") as f:
        f.write(encoding.bom)
        f.write(text.encode(encoding.name))
