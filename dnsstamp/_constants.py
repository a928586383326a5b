"""DNS Stamp constants: URI scheme, protocol tags, and wire-layout sizes.

Every stamp payload starts with a one-byte protocol tag.  All variants
except AnonymizedRelay then carry an 8-byte properties block: one
properties byte followed by seven reserved bytes.
"""

from __future__ import annotations

from enum import IntEnum

# Literal, case-sensitive prefix of every stamp URI.
SCHEME = "sdns://"


class Protocol(IntEnum):
    """Protocol tag byte.  The set is closed; anything else is unsupported."""

    DNSCRYPT = 0x01
    DOH = 0x02
    DOT = 0x03
    PLAIN = 0x04
    ODOH = 0x05
    ANONYMIZED_RELAY = 0x81
    ODOH_RELAY = 0x85


# ── Properties block ─────────────────────────────────────────
PROP_DNSSEC: int = 1 << 0
PROP_NOLOG: int = 1 << 1
PROP_NOFILTER: int = 1 << 2

# Bytes following the properties byte.  Always zero on the wire; ignored on read.
RESERVED_LEN: int = 7

# ── Length-prefixed fields ───────────────────────────────────
# The prefix is a single unsigned byte.
MAX_FIELD_LEN: int = 0xFF

# Separators accepted (and stripped) inside hex input for pk / hash.
HEX_SEPARATORS = ": \t"
