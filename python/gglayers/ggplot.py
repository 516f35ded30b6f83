from collections import abc
from dataclasses import field
from types import MappingProxyType
from typing import Any, Optional

import numpy as np
import pandas as pd

from gglayers.aes import Aesthetic, aes, merge_mappings
from gglayers.layer import CONSTANT, Layer, ResolvedLayer, layer, resolve, validate_aesthetics
from gglayers.typecheck import typecheck
from gglayers.utils import add_fields, frozen_dataclass, logger, merge


# dataclasses -------------------------------------------------------------------------------------
@frozen_dataclass
class Labels:
    title: Optional[str] = None
    xlabel: Optional[str] = None
    ylabel: Optional[str] = None


def add_to_plot(plot, other):
    if isinstance(other, (list, tuple)):
        for component in other:
            plot = add_to_plot(plot, component)
        return plot
    for typ, get_fields in [
        (abc.Mapping, lambda plot, other: {"mapping": merge_mappings(plot.mapping, other)}),
        (Layer, lambda plot, other: {"layers": (*plot.layers, other)}),
        (Labels, lambda plot, other: {"labels": merge(plot.labels, other)}),
    ]:
        if isinstance(other, typ):
            return add_fields(plot, get_fields(plot, other))
    raise TypeError(f"Cannot add object of type '{type(other).__name__}' to a plot")


@frozen_dataclass
class Plot:
    data: Any = field(default=None, compare=False)
    mapping: Aesthetic = field(default_factory=lambda: MappingProxyType({}), hash=False)
    layers: tuple = ()
    labels: Labels = Labels()

    __add__ = add_to_plot

    def build(self) -> "BuiltPlot":
        return build(self)


@frozen_dataclass
class BuiltPlot:
    """Every layer of a plot resolved and validated, ready for a renderer."""
    plot: Plot
    layers: tuple
    labels: Labels

    def __iter__(self):
        return iter(self.layers)

    def __len__(self):
        return len(self.layers)


def _default_labels(resolved_layers: tuple) -> Labels:
    # the first layer that names a variable for x or y supplies the axis title
    defaults = {}
    for resolved in resolved_layers:
        for aes_name, label_field in [("x", "xlabel"), ("y", "ylabel")]:
            if label_field in defaults:
                continue
            mapped = resolved.aesthetics.get(aes_name)
            if mapped is not None and mapped.kind != CONSTANT:
                defaults[label_field] = str(mapped.value)
            elif mapped is None and aes_name in resolved.stat.default_aes:
                defaults[label_field] = resolved.stat.default_aes[aes_name].name
    return Labels(**defaults)


def build(plot: Plot) -> BuiltPlot:
    """Resolve and validate every layer of ``plot`` in order.

    The first layer that fails aborts the build with its error.
    """
    resolved: list[ResolvedLayer] = []
    for idx, plot_layer in enumerate(plot.layers):
        logger.debug(f"Building layer {idx}: geom_{plot_layer.geom}")
        resolved.append(validate_aesthetics(resolve(plot_layer, plot.data, plot.mapping)))
    layers = tuple(resolved)
    return BuiltPlot(plot, layers, merge(_default_labels(layers), plot.labels))


# api ---------------------------------------------------------------------------------------------
@typecheck
def ggplot(data: Any = None, mapping: Optional[abc.Mapping] = None) -> Plot:
    return Plot(data, merge_mappings(None, mapping))


def _layer(geom, mapping, *, data=None, stat=None, position=None, inherit_aes=True, params=None):
    return layer(geom, stat, data=data, mapping=mapping, position=position, params=params or {}, inherit_aes=inherit_aes)


def geom_abline(mapping=None, *, data=None, slope=None, intercept=None, **params):
    if slope is not None or intercept is not None:
        slope = 1 if slope is None else slope
        intercept = 0 if intercept is None else intercept
        data = pd.DataFrame({"slope": np.atleast_1d(slope), "intercept": np.atleast_1d(intercept)})
        return _layer("abline", aes(slope="slope", intercept="intercept"), data=data, inherit_aes=False, params=params)
    return _layer("abline", mapping, data=data, inherit_aes=False, params=params)


def geom_area(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("area", mapping, data=data, stat=stat, position=position, params=params)


def geom_bar(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("bar", mapping, data=data, stat=stat, position=position, params=params)


def geom_boxplot(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("boxplot", mapping, data=data, stat=stat, position=position, params=params)


def geom_col(mapping=None, *, data=None, position=None, **params):
    return _layer("col", mapping, data=data, position=position, params=params)


def geom_density(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("density", mapping, data=data, stat=stat, position=position, params=params)


def geom_errorbar(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("errorbar", mapping, data=data, stat=stat, position=position, params=params)


def geom_freqpoly(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("freqpoly", mapping, data=data, stat=stat, position=position, params=params)


def geom_histogram(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("histogram", mapping, data=data, stat=stat, position=position, params=params)


def geom_hline(mapping=None, *, data=None, yintercept=None, **params):
    if yintercept is not None:
        data = pd.DataFrame({"yintercept": np.atleast_1d(yintercept)})
        return _layer("hline", aes(yintercept="yintercept"), data=data, inherit_aes=False, params=params)
    return _layer("hline", mapping, data=data, inherit_aes=False, params=params)


def geom_jitter(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("jitter", mapping, data=data, stat=stat, position=position, params=params)


def geom_label(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("label", mapping, data=data, stat=stat, position=position, params=params)


def geom_line(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("line", mapping, data=data, stat=stat, position=position, params=params)


def geom_path(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("path", mapping, data=data, stat=stat, position=position, params=params)


def geom_point(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("point", mapping, data=data, stat=stat, position=position, params=params)


def geom_pointrange(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("pointrange", mapping, data=data, stat=stat, position=position, params=params)


def geom_rect(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("rect", mapping, data=data, stat=stat, position=position, params=params)


def geom_ribbon(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("ribbon", mapping, data=data, stat=stat, position=position, params=params)


def geom_smooth(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("smooth", mapping, data=data, stat=stat, position=position, params=params)


def geom_step(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("step", mapping, data=data, stat=stat, position=position, params=params)


def geom_text(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("text", mapping, data=data, stat=stat, position=position, params=params)


def geom_tile(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("tile", mapping, data=data, stat=stat, position=position, params=params)


def geom_violin(mapping=None, *, data=None, stat=None, position=None, **params):
    return _layer("violin", mapping, data=data, stat=stat, position=position, params=params)


def geom_vline(mapping=None, *, data=None, xintercept=None, **params):
    if xintercept is not None:
        data = pd.DataFrame({"xintercept": np.atleast_1d(xintercept)})
        return _layer("vline", aes(xintercept="xintercept"), data=data, inherit_aes=False, params=params)
    return _layer("vline", mapping, data=data, inherit_aes=False, params=params)


def stat_bin(mapping=None, *, data=None, geom=None, position=None, **params):
    return layer(geom, "bin", data=data, mapping=mapping, position=position, params=params)


def stat_count(mapping=None, *, data=None, geom=None, position=None, **params):
    return layer(geom, "count", data=data, mapping=mapping, position=position, params=params)


def stat_density(mapping=None, *, data=None, geom=None, position=None, **params):
    return layer(geom, "density", data=data, mapping=mapping, position=position, params=params)


def stat_ecdf(mapping=None, *, data=None, geom=None, position=None, **params):
    return layer(geom, "ecdf", data=data, mapping=mapping, position=position, params=params)


def stat_function(mapping=None, *, data=None, geom=None, position=None, **params):
    return layer(geom, "function", data=data, mapping=mapping, position=position, params=params)


def stat_identity(mapping=None, *, data=None, geom=None, position=None, **params):
    return layer(geom, "identity", data=data, mapping=mapping, position=position, params=params)


def stat_qq(mapping=None, *, data=None, geom=None, position=None, **params):
    return layer(geom, "qq", data=data, mapping=mapping, position=position, params=params)


def stat_smooth(mapping=None, *, data=None, geom=None, position=None, **params):
    return layer(geom, "smooth", data=data, mapping=mapping, position=position, params=params)


def stat_summary(mapping=None, *, data=None, geom=None, position=None, **params):
    return layer(geom, "summary", data=data, mapping=mapping, position=position, params=params)


@typecheck
def ggtitle(label: str) -> Labels:
    return Labels(title=label)


@typecheck
def labs(title: Optional[str] = None, x: Optional[str] = None, y: Optional[str] = None) -> Labels:
    return Labels(title=title, xlabel=x, ylabel=y)


@typecheck
def xlab(label: str) -> Labels:
    return Labels(xlabel=label)


@typecheck
def ylab(label: str) -> Labels:
    return Labels(ylabel=label)
