"""Properties codec — the three resolver flags packed into one byte.

    bit 0  dnssec    resolver validates DNSSEC
    bit 1  nolog     resolver keeps no query logs
    bit 2  nofilter  resolver does not block or rewrite answers

Bits 3-7 are reserved: written as zero, ignored when read.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from ._constants import PROP_DNSSEC, PROP_NOFILTER, PROP_NOLOG


@dataclass(frozen=True)
class Properties:
    dnssec: bool = True
    nolog: bool = True
    nofilter: bool = True

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise TypeError("Properties.{} must be bool, not {}".format(
                    f.name, type(value).__name__))


def to_bits(props: Properties) -> int:
    """Pack `props` into a properties byte with the reserved bits cleared."""
    bits = 0
    if props.dnssec:
        bits |= PROP_DNSSEC
    if props.nolog:
        bits |= PROP_NOLOG
    if props.nofilter:
        bits |= PROP_NOFILTER
    return bits


def from_bits(byte: int) -> Properties:
    """Unpack a properties byte.  Reserved bits are dropped, never rejected."""
    return Properties(
        dnssec=bool(byte & PROP_DNSSEC),
        nolog=bool(byte & PROP_NOLOG),
        nofilter=bool(byte & PROP_NOFILTER),
    )
