from dataclasses import field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from gglayers.errors import ConfigurationError
from gglayers.registry import DEFAULT_REGISTRY, Registry
from gglayers.utils import frozen_dataclass


@frozen_dataclass
class Position:
    name: str
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), hash=False)

    def __repr__(self):
        args = ", ".join(f"{k}={v!r}" for k, v in self.params.items())
        return f"position_{self.name}({args})"


def as_position(position: Union[str, Position], registry: Optional[Registry] = None) -> Position:
    """Check ``position`` against the registry and return it as a ``Position``."""
    registry = registry if registry is not None else DEFAULT_REGISTRY
    if isinstance(position, Position):
        spec = registry.position(position.name)
        unknown = sorted(set(position.params) - set(spec.parameters))
        if unknown:
            raise ConfigurationError(f"position_{spec.name} does not take parameter(s) {', '.join(unknown)}; expected one of {', '.join(spec.parameters) or 'none'}")
        return position
    return Position(registry.position(position).name)


def _position(name, **params):
    return Position(name, MappingProxyType({k: v for k, v in params.items() if v is not None}))


def position_identity():
    return _position("identity")


def position_dodge(width=None, preserve=None):
    return _position("dodge", width=width, preserve=preserve)


def position_fill(vjust=None, reverse=None):
    return _position("fill", vjust=vjust, reverse=reverse)


def position_jitter(width=None, height=None, seed=None):
    return _position("jitter", width=width, height=height, seed=seed)


def position_nudge(x=None, y=None):
    return _position("nudge", x=x, y=y)


def position_stack(vjust=None, reverse=None):
    return _position("stack", vjust=vjust, reverse=reverse)
