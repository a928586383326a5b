"""Stamp variants — one immutable class per protocol tag.

    DNSCrypt         0x01   addr, pk, provider_name
    DOH              0x02   addr, hash, host_name, path
    DOT              0x03   addr, hash, host_name
    Plain            0x04   addr
    ODOH             0x05   host_name, path
    AnonymizedRelay  0x81   addr               (no properties block)
    ODOHRelay        0x85   addr, hash, host_name, path

Each class lists its wire fields in `WIRE_FIELDS` as (attribute, kind)
pairs, kind being "text" or "hex".  The codec walks that tuple in order,
so the tuple *is* the wire layout.  DOH and ODOHRelay share a layout and
differ only by tag; they are still distinct, unrelated types.

Field notes:
  addr       IP address, optionally with port; IPv6 in brackets.  May be
             empty or just ":port", meaning the host name is resolved by
             some other mechanism.
  host_name  TLS SNI name, carried as-is (no punycode, no URL-encoding).
  path       absolute URI path, e.g. /dns-query.
  hash       SHA256 digest(s) of a certificate in the validation chain,
             concatenated, as hex.
  pk         DNSCrypt provider public key, as hex.

Hex attributes are normalized on construction (lowercase, separators
removed) so that a value always equals its own decoded encoding.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import ClassVar, Tuple, Union

from ._constants import Protocol
from ._fields import normalize_hex
from ._properties import Properties

TEXT = "text"
HEX = "hex"


class _StampBase:
    PROTOCOL: ClassVar[Protocol]
    HAS_PROPS: ClassVar[bool] = True
    WIRE_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = ()

    def __post_init__(self) -> None:
        for name, kind in self.WIRE_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError("{}.{} must be str, not {}".format(
                    type(self).__name__, name, type(value).__name__))
            if kind == HEX:
                # frozen dataclass: bypass the generated __setattr__
                object.__setattr__(self, name, normalize_hex(value))
        if self.HAS_PROPS and not isinstance(getattr(self, "props"), Properties):
            raise TypeError("{}.props must be Properties".format(type(self).__name__))

    def __str__(self) -> str:
        from ._codec import to_uri
        return to_uri(self)


@dataclass(frozen=True)
class DNSCrypt(_StampBase):
    PROTOCOL: ClassVar[Protocol] = Protocol.DNSCRYPT
    WIRE_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("addr", TEXT), ("pk", HEX), ("provider_name", TEXT))

    addr: str = ""
    pk: str = ""
    provider_name: str = ""
    props: Properties = field(default_factory=Properties)


@dataclass(frozen=True)
class DOH(_StampBase):
    PROTOCOL: ClassVar[Protocol] = Protocol.DOH
    WIRE_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("addr", TEXT), ("hash", HEX), ("host_name", TEXT), ("path", TEXT))

    addr: str = ""
    hash: str = ""
    host_name: str = ""
    path: str = ""
    props: Properties = field(default_factory=Properties)


@dataclass(frozen=True)
class DOT(_StampBase):
    PROTOCOL: ClassVar[Protocol] = Protocol.DOT
    WIRE_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("addr", TEXT), ("hash", HEX), ("host_name", TEXT))

    addr: str = ""
    hash: str = ""
    host_name: str = ""
    props: Properties = field(default_factory=Properties)


@dataclass(frozen=True)
class Plain(_StampBase):
    PROTOCOL: ClassVar[Protocol] = Protocol.PLAIN
    WIRE_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (("addr", TEXT),)

    addr: str = ""
    props: Properties = field(default_factory=Properties)


@dataclass(frozen=True)
class ODOH(_StampBase):
    """Oblivious DoH target.  Has no address: the relay resolves host_name."""

    PROTOCOL: ClassVar[Protocol] = Protocol.ODOH
    WIRE_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("host_name", TEXT), ("path", TEXT))

    host_name: str = ""
    path: str = ""
    props: Properties = field(default_factory=Properties)


@dataclass(frozen=True)
class AnonymizedRelay(_StampBase):
    PROTOCOL: ClassVar[Protocol] = Protocol.ANONYMIZED_RELAY
    HAS_PROPS: ClassVar[bool] = False
    WIRE_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (("addr", TEXT),)

    addr: str = ""


@dataclass(frozen=True)
class ODOHRelay(_StampBase):
    PROTOCOL: ClassVar[Protocol] = Protocol.ODOH_RELAY
    WIRE_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = DOH.WIRE_FIELDS

    addr: str = ""
    hash: str = ""
    host_name: str = ""
    path: str = ""
    props: Properties = field(default_factory=Properties)


Stamp = Union[DNSCrypt, DOH, DOT, Plain, ODOH, AnonymizedRelay, ODOHRelay]

VARIANTS = {
    cls.PROTOCOL: cls
    for cls in (DNSCrypt, DOH, DOT, Plain, ODOH, AnonymizedRelay, ODOHRelay)
}


def replace(stamp: Stamp, **changes) -> Stamp:
    """Return a copy of `stamp` with the given fields overridden.

    Unknown field names raise TypeError; the variant never changes.
    """
    return dataclasses.replace(stamp, **changes)
