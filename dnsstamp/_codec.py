"""DNS Stamp encoder and decoder.

Payload layout (all variants):

    tag (1 byte)
    [properties (1 byte) + reserved (7 zero bytes)]   absent for AnonymizedRelay
    field*   each as  length (1 byte) || bytes

The field list and its order come from the variant's WIRE_FIELDS.  The
URI form is "sdns://" followed by the unpadded base64url payload.

Decoding runs the same steps backwards: scheme, base64url, tag dispatch,
properties block, fields.  Dispatch is by tag alone, which is the only
thing separating DOH from ODOHRelay.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Dict, List

from loguru import logger

from ._constants import RESERVED_LEN, SCHEME
from ._errors import (
    ERR_INVALID_ENCODING,
    ERR_INVALID_SCHEME,
    DecodeError,
    UnsupportedProtocolError,
)
from ._fields import (
    encode_hex,
    encode_text,
    pack_field,
    read_byte,
    read_hex,
    read_text,
    skip,
)
from ._properties import from_bits, to_bits
from ._stamps import HEX, VARIANTS, Stamp

_B64URL = re.compile(r"[A-Za-z0-9_-]*")


# ── base64url (RFC 4648 §5, no padding) ──────────────────────

def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(text: str) -> bytes:
    # urlsafe_b64decode silently drops characters outside the alphabet,
    # so check the alphabet first.
    if not _B64URL.fullmatch(text):
        raise DecodeError(ERR_INVALID_ENCODING, "invalid base64url character")
    if len(text) % 4 == 1:
        raise DecodeError(ERR_INVALID_ENCODING, "invalid base64url length")
    try:
        return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
    except (binascii.Error, ValueError) as e:
        raise DecodeError(ERR_INVALID_ENCODING, "base64url decode failed: {}".format(e))


# ── Encode ───────────────────────────────────────────────────

def encode_payload(stamp: Stamp) -> bytes:
    """Render a stamp value to its binary payload."""
    parts: List[bytes] = [bytes([stamp.PROTOCOL])]
    if stamp.HAS_PROPS:
        parts.append(bytes([to_bits(stamp.props)]) + bytes(RESERVED_LEN))
    for name, kind in stamp.WIRE_FIELDS:
        value = getattr(stamp, name)
        raw = encode_hex(value) if kind == HEX else encode_text(value)
        parts.append(pack_field(raw))
    return b"".join(parts)


def to_uri(stamp: Stamp) -> str:
    """Render a stamp value as an "sdns://" URI."""
    payload = encode_payload(stamp)
    logger.debug("encoded {} stamp ({} bytes)", type(stamp).__name__, len(payload))
    return SCHEME + _b64url_encode(payload)


# ── Decode ───────────────────────────────────────────────────

def decode_payload(buf: bytes) -> Stamp:
    """Parse a binary payload into a stamp value."""
    tag, off = read_byte(buf, 0)
    cls = VARIANTS.get(tag)
    if cls is None:
        raise UnsupportedProtocolError(tag)

    kwargs: Dict[str, object] = {}
    if cls.HAS_PROPS:
        bits, off = read_byte(buf, off)
        # Reserved bytes are skipped unchecked; unknown bits are not surfaced.
        off = skip(buf, off, RESERVED_LEN)
        kwargs["props"] = from_bits(bits)

    for name, kind in cls.WIRE_FIELDS:
        if kind == HEX:
            kwargs[name], off = read_hex(buf, off)
        else:
            kwargs[name], off = read_text(buf, off)

    if off != len(buf):
        logger.warning("{} stamp: ignoring {} unconsumed trailing byte(s)",
                       cls.__name__, len(buf) - off)

    stamp = cls(**kwargs)
    logger.debug("decoded {} stamp ({} bytes)", cls.__name__, len(buf))
    return stamp


def parse(uri: str) -> Stamp:
    """Parse an "sdns://" URI into a stamp value."""
    if not uri.startswith(SCHEME):
        raise DecodeError(ERR_INVALID_SCHEME, "stamp must start with {!r}".format(SCHEME))
    return decode_payload(_b64url_decode(uri[len(SCHEME):]))
