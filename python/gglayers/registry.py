"""Catalogs of geoms, stats and position adjustments.

Each entry is a fixed-shape descriptor: what a geom needs to be drawn, what a
stat needs and produces, and which parameters a position adjustment takes.
Nothing here draws or computes anything; renderers and numerical backends look
up the same names to find their implementations.
"""
from dataclasses import field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from gglayers.aes import AfterStat
from gglayers.errors import UnknownIdentifierError
from gglayers.utils import frozen_dataclass


@frozen_dataclass
class GeomSpec:
    name: str
    required_aes: frozenset
    default_stat: str = "identity"
    default_position: str = "identity"
    # whether the drawn extents of separate observations can collide
    can_overlap: bool = True


@frozen_dataclass
class StatSpec:
    name: str
    default_geom: str
    required_aes: frozenset = frozenset()
    computed: tuple = ()
    # aesthetics the stat fills in from its computed variables
    default_aes: Mapping = field(default_factory=lambda: MappingProxyType({}), hash=False)


@frozen_dataclass
class PositionSpec:
    name: str
    parameters: tuple = ()


def _geoms(*specs: GeomSpec) -> Mapping[str, GeomSpec]:
    return MappingProxyType({spec.name: spec for spec in specs})


def _stats(*specs: StatSpec) -> Mapping[str, StatSpec]:
    return MappingProxyType({spec.name: spec for spec in specs})


def _positions(*specs: PositionSpec) -> Mapping[str, PositionSpec]:
    return MappingProxyType({spec.name: spec for spec in specs})


def _after_stat(**kwargs: str) -> Mapping:
    return MappingProxyType({k: AfterStat(v) for k, v in kwargs.items()})


_XY = frozenset({"x", "y"})

GEOMS = _geoms(
    GeomSpec("abline", frozenset({"slope", "intercept"}), can_overlap=False),
    GeomSpec("area", _XY, default_position="stack"),
    GeomSpec("bar", _XY, default_stat="count", default_position="stack"),
    GeomSpec("boxplot", frozenset({"x", "ymin", "lower", "middle", "upper", "ymax"}), default_stat="boxplot", default_position="dodge"),
    GeomSpec("col", _XY, default_position="stack"),
    GeomSpec("density", _XY, default_stat="density"),
    GeomSpec("errorbar", frozenset({"x", "ymin", "ymax"})),
    GeomSpec("freqpoly", _XY, default_stat="bin", can_overlap=False),
    GeomSpec("histogram", _XY, default_stat="bin", default_position="stack"),
    GeomSpec("hline", frozenset({"yintercept"}), can_overlap=False),
    GeomSpec("jitter", _XY, default_position="jitter"),
    GeomSpec("label", frozenset({"x", "y", "label"})),
    GeomSpec("line", _XY, can_overlap=False),
    GeomSpec("path", _XY, can_overlap=False),
    GeomSpec("point", _XY),
    GeomSpec("pointrange", frozenset({"x", "y", "ymin", "ymax"})),
    GeomSpec("rect", frozenset({"xmin", "xmax", "ymin", "ymax"})),
    GeomSpec("ribbon", frozenset({"x", "ymin", "ymax"})),
    GeomSpec("smooth", _XY, default_stat="smooth", can_overlap=False),
    GeomSpec("step", _XY, can_overlap=False),
    GeomSpec("text", frozenset({"x", "y", "label"})),
    GeomSpec("tile", _XY),
    GeomSpec("violin", _XY, default_stat="ydensity", default_position="dodge"),
    GeomSpec("vline", frozenset({"xintercept"}), can_overlap=False),
)

STATS = _stats(
    StatSpec("identity", "point"),
    StatSpec("bin", "bar", frozenset({"x"}), ("count", "density", "ncount", "ndensity", "width"), _after_stat(y="count")),
    StatSpec("bin_2d", "tile", _XY, ("count", "density", "ncount", "ndensity"), _after_stat(fill="count")),
    StatSpec(
        "boxplot", "boxplot", _XY,
        ("width", "ymin", "lower", "middle", "upper", "ymax", "notchlower", "notchupper", "relvarwidth", "flipped_aes"),
        _after_stat(ymin="ymin", lower="lower", middle="middle", upper="upper", ymax="ymax"),
    ),
    StatSpec("count", "bar", frozenset({"x"}), ("count", "prop", "width"), _after_stat(y="count")),
    StatSpec("density", "area", frozenset({"x"}), ("density", "count", "scaled", "ndensity", "n"), _after_stat(y="density")),
    StatSpec("ecdf", "step", frozenset({"x"}), ("ecdf",), _after_stat(y="ecdf")),
    StatSpec("function", "path", computed=("x", "y"), default_aes=_after_stat(x="x", y="y")),
    StatSpec("qq", "point", frozenset({"sample"}), ("sample", "theoretical"), _after_stat(x="theoretical", y="sample")),
    StatSpec("smooth", "smooth", _XY, ("y", "ymin", "ymax", "se")),
    StatSpec("sum", "point", _XY, ("n", "prop"), _after_stat(size="n")),
    StatSpec("summary", "pointrange", _XY, ("y", "ymin", "ymax"), _after_stat(ymin="ymin", ymax="ymax")),
    StatSpec("unique", "point"),
    StatSpec("ydensity", "violin", _XY, ("density", "scaled", "count", "n", "violinwidth", "width")),
)

POSITIONS = _positions(
    PositionSpec("identity"),
    PositionSpec("dodge", ("width", "preserve")),
    PositionSpec("fill", ("vjust", "reverse")),
    PositionSpec("jitter", ("width", "height", "seed")),
    PositionSpec("nudge", ("x", "y")),
    PositionSpec("stack", ("vjust", "reverse")),
)


@frozen_dataclass
class Registry:
    """The three catalogs a layer is resolved against."""
    geoms: Mapping[str, GeomSpec] = field(default_factory=lambda: GEOMS)
    stats: Mapping[str, StatSpec] = field(default_factory=lambda: STATS)
    positions: Mapping[str, PositionSpec] = field(default_factory=lambda: POSITIONS)

    def geom(self, name: str) -> GeomSpec:
        return _lookup("geom", self.geoms, name)

    def stat(self, name: str) -> StatSpec:
        return _lookup("stat", self.stats, name)

    def position(self, name: str) -> PositionSpec:
        return _lookup("position", self.positions, name)

    def extend(self, *, geoms: Iterable[GeomSpec] = (), stats: Iterable[StatSpec] = (), positions: Iterable[PositionSpec] = ()) -> "Registry":
        """Return a new registry with the given descriptors added or replaced."""
        return Registry(
            geoms=MappingProxyType({**self.geoms, **{spec.name: spec for spec in geoms}}),
            stats=MappingProxyType({**self.stats, **{spec.name: spec for spec in stats}}),
            positions=MappingProxyType({**self.positions, **{spec.name: spec for spec in positions}}),
        )


def _lookup(kind, catalog, name):
    spec = catalog.get(name) if isinstance(name, str) else None
    if spec is None:
        raise UnknownIdentifierError(kind, name, catalog.keys())
    return spec


DEFAULT_REGISTRY = Registry()


def geom_spec(name: str, registry: Optional[Registry] = None) -> GeomSpec:
    return (registry or DEFAULT_REGISTRY).geom(name)


def stat_spec(name: str, registry: Optional[Registry] = None) -> StatSpec:
    return (registry or DEFAULT_REGISTRY).stat(name)


def position_spec(name: str, registry: Optional[Registry] = None) -> PositionSpec:
    return (registry or DEFAULT_REGISTRY).position(name)
