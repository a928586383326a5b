"""DNS Stamp error codes and exception classes.

Every failure carries a `.code` string from the ERR_* constants below.
Encoding problems raise EncodeError, decoding problems raise DecodeError;
both derive from StampError so callers can catch one type.
"""

from __future__ import annotations

from typing import Optional

# ── Decode-side codes ────────────────────────────────────────
ERR_INVALID_SCHEME: str = "ERR_INVALID_SCHEME"            # missing "sdns://"
ERR_INVALID_ENCODING: str = "ERR_INVALID_ENCODING"        # bad base64url
ERR_UNSUPPORTED_PROTOCOL: str = "ERR_UNSUPPORTED_PROTOCOL"  # unknown tag byte
ERR_TRUNCATED: str = "ERR_TRUNCATED"                      # read past end of payload
ERR_INVALID_TEXT: str = "ERR_INVALID_TEXT"                # text field is not UTF-8

# ── Encode-side codes ────────────────────────────────────────
ERR_INVALID_HEX: str = "ERR_INVALID_HEX"                  # pk / hash is not hex
ERR_FIELD_TOO_LONG: str = "ERR_FIELD_TOO_LONG"            # field exceeds 255 bytes

# ── Descriptor adapter ───────────────────────────────────────
ERR_DESCRIPTOR: str = "ERR_DESCRIPTOR"                    # malformed dict / file


class StampError(Exception):
    """Base exception for DNS Stamp processing errors.

    The `.code` attribute is one of the ERR_* strings above.
    """

    def __init__(self, code: str, msg: str = "") -> None:
        super().__init__(msg or code)
        self.code = code


class EncodeError(StampError):
    """Raised when a stamp value cannot be serialized."""


class DecodeError(StampError):
    """Raised when a stamp string or payload cannot be parsed."""


class UnsupportedProtocolError(DecodeError):
    """Raised for a payload whose tag byte names no known variant."""

    def __init__(self, tag: int, msg: Optional[str] = None) -> None:
        super().__init__(ERR_UNSUPPORTED_PROTOCOL,
                         msg or "unsupported protocol: 0x{:02x}".format(tag))
        self.tag = tag
