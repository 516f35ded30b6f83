from collections import abc
from dataclasses import field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

import numpy as np
import pandas as pd

from gglayers.aes import AfterStat, Aesthetic, Literal, merge_mappings, standardise_aes_name, standardise_aes_names
from gglayers.dataset import as_dataset, column, has_column
from gglayers.errors import ConfigurationError, MissingAestheticError, UnknownIdentifierError
from gglayers.position import Position, as_position
from gglayers.registry import DEFAULT_REGISTRY, GeomSpec, Registry, StatSpec
from gglayers.typecheck import typecheck
from gglayers.utils import frozen_dataclass, logger, warning


COMPUTED = "computed"
COLUMN = "column"
CONSTANT = "constant"


def _empty():
    return MappingProxyType({})


@frozen_dataclass
class Layer:
    geom: str
    stat: str
    position: Position
    data: Any = field(default=None, compare=False)
    mapping: Aesthetic = field(default_factory=_empty, hash=False)
    params: Mapping[str, Any] = field(default_factory=_empty, hash=False)
    inherit_aes: bool = True
    registry: Registry = field(default=DEFAULT_REGISTRY, repr=False, compare=False)

    @property
    def geom_spec(self) -> GeomSpec:
        return self.registry.geom(self.geom)

    @property
    def stat_spec(self) -> StatSpec:
        return self.registry.stat(self.stat)

    def resolve(self, plot_data: Any = None, plot_mapping: Optional[Mapping[str, Any]] = None) -> "ResolvedLayer":
        return resolve(self, plot_data, plot_mapping)


@frozen_dataclass
class ResolvedAesthetic:
    aesthetic: str
    kind: str
    value: Any


@frozen_dataclass
class ResolvedLayer:
    """A layer bound to a concrete dataset and a fully merged mapping."""
    layer: Layer
    data: pd.DataFrame = field(compare=False)
    mapping: Aesthetic = field(hash=False)
    aesthetics: Mapping[str, ResolvedAesthetic] = field(hash=False)
    geom: GeomSpec
    stat: StatSpec
    position: Position

    @property
    def params(self) -> Mapping[str, Any]:
        return self.layer.params

    @property
    def available_aes(self) -> frozenset:
        return frozenset(self.mapping) | frozenset(self.params) | frozenset(self.stat.default_aes)

    def evaluate(self, aesthetic: str) -> np.ndarray:
        """Values of ``aesthetic`` for every row of the dataset.

        Set parameters take precedence over mapped aesthetics. Computed
        variables only exist once the stat has run, so they cannot be
        evaluated here.
        """
        name = standardise_aes_name(aesthetic)
        if name in self.params:
            return _broadcast(self.params[name], len(self.data))
        resolved = self.aesthetics.get(name)
        if resolved is None and name in self.stat.default_aes:
            resolved = ResolvedAesthetic(name, COMPUTED, self.stat.default_aes[name].name)
        if resolved is None:
            raise UnknownIdentifierError("aesthetic", name, self.aesthetics.keys())
        if resolved.kind == COMPUTED:
            raise ConfigurationError(f"Aesthetic '{name}' refers to {resolved.value!r}, which only exists after stat_{self.stat.name} has run")
        if resolved.kind == COLUMN:
            return column(self.data, resolved.value)
        return _broadcast(resolved.value, len(self.data))


def _broadcast(value, n):
    if np.isscalar(value):
        values = np.full(n, value)
    else:
        values = np.empty(n, dtype=object)
        values.fill(value)
    values.flags.writeable = False
    return values


@typecheck
def layer(
    geom: Optional[str] = None,
    stat: Optional[str] = None,
    *,
    data: Any = None,
    mapping: Optional[abc.Mapping] = None,
    position: Optional[Union[str, Position]] = None,
    params: Optional[abc.Mapping] = None,
    inherit_aes: bool = True,
    registry: Optional[Registry] = None,
) -> Layer:
    """Construct a layer.

    Either ``geom`` or ``stat`` may be left out: a geom brings its default
    stat and a stat brings its default geom. ``position`` defaults to the
    geom's default position. Unknown names raise ``UnknownIdentifierError``.
    """
    registry = registry if registry is not None else DEFAULT_REGISTRY
    if geom is None and stat is None:
        raise ConfigurationError("A layer needs a geom or a stat")
    geom_spec = registry.geom(geom if geom is not None else registry.stat(stat).default_geom)
    stat_spec = registry.stat(stat if stat is not None else geom_spec.default_stat)
    position = as_position(position if position is not None else geom_spec.default_position, registry)
    if position.name != "identity" and not geom_spec.can_overlap:
        warning(f"position_{position.name} has no effect on geom_{geom_spec.name}, whose observations cannot overlap")
    return Layer(
        geom=geom_spec.name,
        stat=stat_spec.name,
        position=position,
        data=data,
        mapping=standardise_aes_names(mapping),
        params=MappingProxyType({k: v for k, v in standardise_aes_names(params).items() if v is not None}),
        inherit_aes=inherit_aes,
        registry=registry,
    )


def _resolve_data(layer: Layer, plot_data: Any) -> pd.DataFrame:
    if layer.data is None:
        if plot_data is None:
            raise ConfigurationError(f"geom_{layer.geom} layer has no data and the plot has no default data")
        return as_dataset(plot_data)
    if callable(layer.data):
        if plot_data is None:
            raise ConfigurationError(f"geom_{layer.geom} layer derives its data from the plot data, but the plot has no default data")
        return as_dataset(layer.data(as_dataset(plot_data)))
    return as_dataset(layer.data)


def _classify(name: str, value: Any, data: pd.DataFrame, stat: StatSpec) -> ResolvedAesthetic:
    if isinstance(value, AfterStat):
        if value.name not in stat.computed:
            raise UnknownIdentifierError(f"computed variable of stat_{stat.name}", value.name, stat.computed)
        return ResolvedAesthetic(name, COMPUTED, value.name)
    if isinstance(value, Literal):
        return ResolvedAesthetic(name, CONSTANT, value.value)
    if has_column(data, value):
        return ResolvedAesthetic(name, COLUMN, value)
    if isinstance(value, str):
        warning(f"Aesthetic '{name}' maps to '{value}', which is not a column; using it as a constant")
    return ResolvedAesthetic(name, CONSTANT, value)


def resolve(layer: Layer, plot_data: Any = None, plot_mapping: Optional[Mapping[str, Any]] = None) -> ResolvedLayer:
    """Bind ``layer`` to a dataset and merge its mapping over the plot's.

    The layer's own data wins over ``plot_data``; a layer mapping entry
    replaces the plot entry of the same aesthetic and a ``None`` entry drops
    it. Each aesthetic is then classified as a computed variable, a column or
    a constant, in that order of precedence.
    """
    data = _resolve_data(layer, plot_data)
    mapping = merge_mappings(plot_mapping if layer.inherit_aes else None, layer.mapping)
    geom = layer.geom_spec
    stat = layer.stat_spec
    aesthetics = MappingProxyType({name: _classify(name, value, data, stat) for name, value in mapping.items()})
    logger.debug(f"Resolved geom_{geom.name}/stat_{stat.name} layer over {len(data)} rows: {dict(mapping)}")
    return ResolvedLayer(layer, data, mapping, aesthetics, geom, stat, layer.position)


def validate_aesthetics(resolved: ResolvedLayer) -> ResolvedLayer:
    """Check that the stat and the geom have every aesthetic they require."""
    available = resolved.available_aes
    missing = resolved.stat.required_aes - available
    if missing:
        raise MissingAestheticError(f"stat_{resolved.stat.name}", missing)
    missing = resolved.geom.required_aes - available
    if missing:
        raise MissingAestheticError(f"geom_{resolved.geom.name}", missing)
    return resolved
