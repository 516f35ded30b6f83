from types import MappingProxyType
from typing import Any, Mapping, Optional

from gglayers.utils import frozen_dataclass


AESTHETIC_ALIASES = MappingProxyType({
    "adj": "hjust",
    "bg": "fill",
    "cex": "size",
    "col": "colour",
    "color": "colour",
    "fg": "colour",
    "lty": "linetype",
    "lwd": "linewidth",
    "max": "ymax",
    "min": "ymin",
    "pch": "shape",
    "srt": "angle",
})


@frozen_dataclass
class AfterStat:
    """Reference to a variable generated by a layer's stat rather than a raw column."""
    name: str

    def __repr__(self):
        return f"after_stat({self.name!r})"


@frozen_dataclass
class Literal:
    """A constant aesthetic value, never looked up as a column."""
    value: Any

    def __repr__(self):
        return f"literal({self.value!r})"


Aesthetic = Mapping[str, Any]

_unset = object()


def standardise_aes_name(name: str) -> str:
    return AESTHETIC_ALIASES.get(name, name)


def standardise_aes_names(mapping: Optional[Mapping[str, Any]]) -> Aesthetic:
    if mapping is None:
        return MappingProxyType({})
    return MappingProxyType({standardise_aes_name(k): v for k, v in mapping.items()})


def aes(x: Any = _unset, y: Any = _unset, **kwargs: Any) -> Aesthetic:
    """Build an aesthetic mapping.

    Values are variable names, ``after_stat(...)`` references, ``literal(...)``
    constants or plain scalars. ``None`` marks the aesthetic for removal when
    the mapping is merged over an inherited one.
    """
    return standardise_aes_names({
        **({"x": x} if x is not _unset else {}),
        **({"y": y} if y is not _unset else {}),
        **kwargs,
    })


def after_stat(name: str) -> AfterStat:
    return AfterStat(name)


def literal(value: Any) -> Literal:
    return value if isinstance(value, Literal) else Literal(value)


def merge_mappings(defaults: Optional[Mapping[str, Any]], override: Optional[Mapping[str, Any]]) -> Aesthetic:
    # key-wise, last writer wins; None removes the inherited key
    merged = {**standardise_aes_names(defaults), **standardise_aes_names(override)}
    return MappingProxyType({k: v for k, v in merged.items() if v is not None})
