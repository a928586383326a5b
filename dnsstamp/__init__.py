"""dnsstamp — DNS Stamp encoding and decoding.

A DNS Stamp packs everything a client needs to reach a secure resolver
(protocol, address, certificate hashes or public key, host name, path
and a few advertised properties) into one "sdns://" URI.

Quick start:
    >>> from dnsstamp import DOH, parse
    >>> str(DOH(path="/foo"))
    'sdns://AgcAAAAAAAAAAAAABC9mb28'
    >>> parse("sdns://gQNmb28")
    AnonymizedRelay(addr='foo')

Stamp values are immutable; use replace() to derive a modified copy:
    >>> from dnsstamp import Properties, replace
    >>> str(replace(DOH(path="/foo"), props=Properties(nolog=False)))
    'sdns://AgUAAAAAAAAAAAAABC9mb28'

Logging goes through loguru and is disabled for this package by
default; call ``logger.enable("dnsstamp")`` to see it.
"""

from __future__ import annotations

from loguru import logger

from ._codec import decode_payload, encode_payload, parse, to_uri
from ._constants import MAX_FIELD_LEN, SCHEME, Protocol
from ._descriptor import load_descriptors, stamp_from_dict, stamp_to_dict
from ._errors import (
    ERR_DESCRIPTOR,
    ERR_FIELD_TOO_LONG,
    ERR_INVALID_ENCODING,
    ERR_INVALID_HEX,
    ERR_INVALID_SCHEME,
    ERR_INVALID_TEXT,
    ERR_TRUNCATED,
    ERR_UNSUPPORTED_PROTOCOL,
    DecodeError,
    EncodeError,
    StampError,
    UnsupportedProtocolError,
)
from ._properties import Properties, from_bits, to_bits
from ._stamps import (
    DNSCrypt,
    DOH,
    DOT,
    ODOH,
    AnonymizedRelay,
    ODOHRelay,
    Plain,
    Stamp,
    replace,
)

__version__ = "1.0.0"

__all__ = [
    # Variants
    "DNSCrypt",
    "DOH",
    "DOT",
    "Plain",
    "ODOH",
    "AnonymizedRelay",
    "ODOHRelay",
    "Stamp",
    "Properties",
    "Protocol",
    "replace",
    # Codec
    "parse",
    "to_uri",
    "encode_payload",
    "decode_payload",
    "to_bits",
    "from_bits",
    # Descriptors
    "stamp_to_dict",
    "stamp_from_dict",
    "load_descriptors",
    # Exceptions
    "StampError",
    "EncodeError",
    "DecodeError",
    "UnsupportedProtocolError",
    # Error codes
    "ERR_INVALID_SCHEME",
    "ERR_INVALID_ENCODING",
    "ERR_UNSUPPORTED_PROTOCOL",
    "ERR_TRUNCATED",
    "ERR_INVALID_TEXT",
    "ERR_INVALID_HEX",
    "ERR_FIELD_TOO_LONG",
    "ERR_DESCRIPTOR",
    # Constants
    "SCHEME",
    "MAX_FIELD_LEN",
]

logger.disable("dnsstamp")
