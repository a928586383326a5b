"""Field codec — length-prefixed text and hex-blob primitives.

A stamp field on the wire is one unsigned length byte followed by that
many bytes.  Text fields carry UTF-8; hash and pk fields carry raw bytes
that the API presents as lowercase hex.

Readers take (buf, off) and return (value, new_off), bounds-checking
every access so a short payload raises ERR_TRUNCATED instead of
yielding whatever happens to lie past the end.
"""

from __future__ import annotations

import re
from typing import Tuple

from ._constants import HEX_SEPARATORS, MAX_FIELD_LEN
from ._errors import (
    ERR_FIELD_TOO_LONG,
    ERR_INVALID_HEX,
    ERR_INVALID_TEXT,
    ERR_TRUNCATED,
    DecodeError,
    EncodeError,
)

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")
_STRIP_SEPARATORS = str.maketrans("", "", HEX_SEPARATORS)


# ── Text ─────────────────────────────────────────────────────

def encode_text(s: str) -> bytes:
    return s.encode("utf-8")


def decode_text(b: bytes) -> str:
    """Strict UTF-8 decode.  No replacement characters are substituted."""
    try:
        return b.decode("utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise DecodeError(ERR_INVALID_TEXT, "invalid utf-8 in text field: {}".format(e.reason))


# ── Hex blobs ────────────────────────────────────────────────

def encode_hex(s: str) -> bytes:
    """Hex string → raw bytes.  ':', space and tab separators are dropped first."""
    digits = s.translate(_STRIP_SEPARATORS)
    if not _HEX_DIGITS.fullmatch(digits):
        raise EncodeError(ERR_INVALID_HEX, "non-hex character in {!r}".format(s))
    if len(digits) % 2:
        raise EncodeError(ERR_INVALID_HEX, "odd number of hex digits in {!r}".format(s))
    return bytes.fromhex(digits)


def decode_hex(b: bytes) -> str:
    return b.hex()


def normalize_hex(s: str) -> str:
    """Canonical form of a hex string: lowercase, no separators."""
    return decode_hex(encode_hex(s))


# ── Length prefix ────────────────────────────────────────────

def length_prefix(b: bytes) -> int:
    if len(b) > MAX_FIELD_LEN:
        raise EncodeError(
            ERR_FIELD_TOO_LONG,
            "field is {} bytes, limit is {}".format(len(b), MAX_FIELD_LEN),
        )
    return len(b)


def pack_field(b: bytes) -> bytes:
    """Prefix `b` with its one-byte length."""
    return bytes([length_prefix(b)]) + b


# ── Bounded readers ──────────────────────────────────────────

def read_byte(buf: bytes, off: int) -> Tuple[int, int]:
    if off >= len(buf):
        raise DecodeError(ERR_TRUNCATED, "truncated at offset {}".format(off))
    return buf[off], off + 1


def skip(buf: bytes, off: int, n: int) -> int:
    if off + n > len(buf):
        raise DecodeError(ERR_TRUNCATED, "truncated reserved block at offset {}".format(off))
    return off + n


def read_field(buf: bytes, off: int) -> Tuple[bytes, int]:
    """Read one length-prefixed field."""
    n, off = read_byte(buf, off)
    if off + n > len(buf):
        raise DecodeError(
            ERR_TRUNCATED,
            "field of {} bytes at offset {} runs past end of {}-byte payload".format(
                n, off, len(buf)),
        )
    return bytes(buf[off:off + n]), off + n


def read_text(buf: bytes, off: int) -> Tuple[str, int]:
    raw, off = read_field(buf, off)
    return decode_text(raw), off


def read_hex(buf: bytes, off: int) -> Tuple[str, int]:
    raw, off = read_field(buf, off)
    return decode_hex(raw), off
