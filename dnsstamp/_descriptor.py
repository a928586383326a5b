"""Descriptor adapter — stamps to and from plain dicts, JSON and YAML.

A descriptor is a flat mapping naming the protocol plus the variant's
fields, with the flags nested under "props":

    protocol: DoH
    addr: 9.9.9.9
    hash: 3e1a1a0f6c53f3e97a492d57084b5b9807059ee057ab1505876fd83fda3db838
    host_name: dns.quad9.net
    path: /dns-query
    props: {dnssec: true, nolog: true, nofilter: false}

Protocol names match case-insensitively against the variant class names
("dnscrypt", "DOH", "AnonymizedRelay", ...).  Omitted fields take their
defaults; unknown keys are rejected rather than dropped.
"""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from ._errors import ERR_DESCRIPTOR, StampError
from ._properties import Properties
from ._stamps import VARIANTS, Stamp

_BY_NAME = {cls.__name__.lower(): cls for cls in VARIANTS.values()}
_PROP_KEYS = tuple(f.name for f in dataclasses.fields(Properties))


def protocol_names() -> List[str]:
    return [cls.__name__ for cls in VARIANTS.values()]


def variant_for_name(name: str):
    cls = _BY_NAME.get(name.lower()) if isinstance(name, str) else None
    if cls is None:
        raise StampError(ERR_DESCRIPTOR, "unknown protocol {!r}; expected one of {}".format(
            name, ", ".join(protocol_names())))
    return cls


def stamp_to_dict(stamp: Stamp) -> Dict[str, Any]:
    out: Dict[str, Any] = {"protocol": type(stamp).__name__}
    for name, _kind in stamp.WIRE_FIELDS:
        out[name] = getattr(stamp, name)
    if stamp.HAS_PROPS:
        out["props"] = dataclasses.asdict(stamp.props)
    return out


def _props_from_dict(raw: Any) -> Properties:
    if not isinstance(raw, dict):
        raise StampError(ERR_DESCRIPTOR, "props must be a mapping")
    unknown = sorted(set(raw) - set(_PROP_KEYS))
    if unknown:
        raise StampError(ERR_DESCRIPTOR, "unknown props key(s): {}".format(", ".join(unknown)))
    for k, v in raw.items():
        if not isinstance(v, bool):
            raise StampError(ERR_DESCRIPTOR, "props.{} must be a boolean".format(k))
    return Properties(**raw)


def stamp_from_dict(d: Dict[str, Any]) -> Stamp:
    """Build a stamp from a descriptor mapping."""
    if not isinstance(d, dict):
        raise StampError(ERR_DESCRIPTOR, "descriptor must be a mapping")
    if "protocol" not in d:
        raise StampError(ERR_DESCRIPTOR, "descriptor has no 'protocol'")
    cls = variant_for_name(d["protocol"])

    allowed = {name for name, _kind in cls.WIRE_FIELDS}
    if cls.HAS_PROPS:
        allowed.add("props")
    kwargs: Dict[str, Any] = {}
    for k, v in d.items():
        if k == "protocol":
            continue
        if k not in allowed:
            raise StampError(ERR_DESCRIPTOR, "{} has no field {!r}".format(cls.__name__, k))
        if k == "props":
            kwargs[k] = _props_from_dict(v)
        elif not isinstance(v, str):
            hint = " (quote hex and numeric values in YAML)" if isinstance(v, (int, float)) else ""
            raise StampError(ERR_DESCRIPTOR, "{}.{} must be a string{}".format(cls.__name__, k, hint))
        else:
            kwargs[k] = v
    return cls(**kwargs)


def load_descriptors(path: Union[str, Path]) -> List[Stamp]:
    """Read stamps from a YAML or JSON file.

    The document may be a single descriptor, a list of descriptors, or a
    mapping whose "stamps" key holds that list.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            doc = yaml.safe_load(text)
        else:
            doc = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise StampError(ERR_DESCRIPTOR, "cannot parse {}: {}".format(path, e))

    if isinstance(doc, dict) and "stamps" in doc:
        doc = doc["stamps"]
    if isinstance(doc, dict):
        doc = [doc]
    if not isinstance(doc, list):
        raise StampError(ERR_DESCRIPTOR, "{}: expected a descriptor or a list of them".format(path))
    return [stamp_from_dict(item) for item in doc]
