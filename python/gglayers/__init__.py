"""Declarative plot specifications in the layered grammar of graphics.

A plot is a default dataset and aesthetic mapping plus an ordered sequence of
layers, each bundling data, mapping, geom, stat and position. Plots are built
by addition and resolved into concrete layers for an external renderer::

    p = ggplot(mpg, aes(x="displ", y="hwy")) + geom_point(aes(colour="cyl"))
    built = p.build()
"""
from gglayers.aes import AfterStat, Literal, aes, after_stat, literal, merge_mappings
from gglayers.errors import ConfigurationError, GGLayersError, MissingAestheticError, UnknownIdentifierError
from gglayers.ggplot import (
    BuiltPlot,
    Labels,
    Plot,
    build,
    geom_abline,
    geom_area,
    geom_bar,
    geom_boxplot,
    geom_col,
    geom_density,
    geom_errorbar,
    geom_freqpoly,
    geom_histogram,
    geom_hline,
    geom_jitter,
    geom_label,
    geom_line,
    geom_path,
    geom_point,
    geom_pointrange,
    geom_rect,
    geom_ribbon,
    geom_smooth,
    geom_step,
    geom_text,
    geom_tile,
    geom_violin,
    geom_vline,
    ggplot,
    ggtitle,
    labs,
    stat_bin,
    stat_count,
    stat_density,
    stat_ecdf,
    stat_function,
    stat_identity,
    stat_qq,
    stat_smooth,
    stat_summary,
    xlab,
    ylab,
)
from gglayers.layer import Layer, ResolvedAesthetic, ResolvedLayer, layer, resolve, validate_aesthetics
from gglayers.position import (
    Position,
    position_dodge,
    position_fill,
    position_identity,
    position_jitter,
    position_nudge,
    position_stack,
)
from gglayers.registry import DEFAULT_REGISTRY, GeomSpec, PositionSpec, Registry, StatSpec, geom_spec, position_spec, stat_spec


__version__ = "0.1.0"

__all__ = [
    "AfterStat",
    "BuiltPlot",
    "ConfigurationError",
    "DEFAULT_REGISTRY",
    "GGLayersError",
    "GeomSpec",
    "Labels",
    "Layer",
    "Literal",
    "MissingAestheticError",
    "Plot",
    "Position",
    "PositionSpec",
    "Registry",
    "ResolvedAesthetic",
    "ResolvedLayer",
    "StatSpec",
    "UnknownIdentifierError",
    "aes",
    "after_stat",
    "build",
    "geom_abline",
    "geom_area",
    "geom_bar",
    "geom_boxplot",
    "geom_col",
    "geom_density",
    "geom_errorbar",
    "geom_freqpoly",
    "geom_histogram",
    "geom_hline",
    "geom_jitter",
    "geom_label",
    "geom_line",
    "geom_path",
    "geom_point",
    "geom_pointrange",
    "geom_rect",
    "geom_ribbon",
    "geom_smooth",
    "geom_spec",
    "geom_step",
    "geom_text",
    "geom_tile",
    "geom_violin",
    "geom_vline",
    "ggplot",
    "ggtitle",
    "labs",
    "layer",
    "literal",
    "merge_mappings",
    "position_dodge",
    "position_fill",
    "position_identity",
    "position_jitter",
    "position_nudge",
    "position_spec",
    "position_stack",
    "resolve",
    "stat_bin",
    "stat_count",
    "stat_density",
    "stat_ecdf",
    "stat_function",
    "stat_identity",
    "stat_qq",
    "stat_smooth",
    "stat_spec",
    "stat_summary",
    "validate_aesthetics",
    "xlab",
    "ylab",
]
