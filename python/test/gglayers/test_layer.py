import dataclasses
import logging

import numpy as np
import pandas as pd
import pytest

from gglayers import (
    ConfigurationError,
    MissingAestheticError,
    Position,
    UnknownIdentifierError,
    aes,
    after_stat,
    geom_bar,
    geom_boxplot,
    geom_line,
    geom_point,
    layer,
    literal,
    position_dodge,
    position_jitter,
    resolve,
    stat_bin,
    stat_count,
    validate_aesthetics,
)
from gglayers.layer import COLUMN, COMPUTED, CONSTANT


def test_geom_brings_default_stat_and_position():
    bar = layer("bar")
    assert (bar.geom, bar.stat, bar.position.name) == ("bar", "count", "stack")
    point = layer("point")
    assert (point.geom, point.stat, point.position.name) == ("point", "identity", "identity")


def test_stat_brings_default_geom():
    binned = layer(stat="bin")
    assert (binned.geom, binned.stat, binned.position.name) == ("bar", "bin", "stack")
    assert stat_count().geom == "bar"


def test_explicit_stat_and_position_win():
    l = layer("point", "sum", position="jitter")
    assert (l.geom, l.stat, l.position.name) == ("point", "sum", "jitter")
    assert stat_bin(geom="line").geom == "line"


def test_layer_needs_geom_or_stat():
    with pytest.raises(ConfigurationError):
        layer()


def test_unknown_identifiers():
    with pytest.raises(UnknownIdentifierError) as exc_info:
        layer("pont")
    assert exc_info.value.kind == "geom"
    assert exc_info.value.name == "pont"
    assert "'point'" in str(exc_info.value)
    with pytest.raises(UnknownIdentifierError, match="stat"):
        layer("point", "loess")
    with pytest.raises(UnknownIdentifierError, match="position"):
        layer("bar", position="scatter")


def test_position_values():
    l = geom_bar(aes(x="class", fill="drv"), position=position_dodge(width=0.9))
    assert l.position.name == "dodge"
    assert dict(l.position.params) == {"width": 0.9}
    assert repr(position_jitter(seed=1)) == "position_jitter(seed=1)"


def test_position_rejects_unknown_parameters():
    with pytest.raises(ConfigurationError, match="does not take"):
        layer("point", position=Position("dodge", {"height": 1}))


def test_position_on_non_overlapping_geom_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="gglayers"):
        geom_line(position="dodge")
    assert "position_dodge has no effect on geom_line" in caplog.text


def test_layer_arguments_are_typechecked():
    with pytest.raises(TypeError):
        layer(5)
    with pytest.raises(TypeError):
        layer("point", mapping=["x", "y"])


def test_layer_is_immutable():
    l = geom_point(aes(x="displ"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        l.geom = "line"
    with pytest.raises(TypeError):
        l.mapping["y"] = "hwy"


def test_params_are_standardised():
    l = geom_point(color="red", cex=3)
    assert dict(l.params) == {"colour": "red", "size": 3}


def test_resolve_inherits_plot_data(mpg):
    resolved = resolve(geom_point(), mpg, aes(x="displ", y="hwy"))
    assert resolved.data is mpg


def test_resolve_prefers_layer_data(mpg, economics):
    resolved = resolve(geom_line(aes(x="date", y="unemploy"), data=economics), mpg)
    assert resolved.data is economics
    assert resolve(geom_line(data=economics)).data is economics


def test_resolve_applies_data_function(mpg):
    resolved = resolve(geom_point(data=lambda d: d[d["cyl"] == 8]), mpg, aes(x="displ", y="hwy"))
    assert list(resolved.data["hwy"]) == [20, 17]


def test_resolve_coerces_plain_data():
    resolved = resolve(geom_point(data={"a": [1, 2], "b": [3, 4]}, mapping=aes(x="a", y="b")))
    assert isinstance(resolved.data, pd.DataFrame)
    assert resolved.aesthetics["x"].kind == COLUMN


def test_resolve_without_any_data_fails():
    with pytest.raises(ConfigurationError):
        resolve(geom_point(aes(x="displ", y="hwy")))
    with pytest.raises(ConfigurationError):
        resolve(geom_point(data=lambda d: d))


def test_resolve_merges_mappings(mpg):
    defaults = aes(x="displ", y="hwy")
    assert dict(resolve(geom_point(aes(colour="cyl")), mpg, defaults).mapping) == {"x": "displ", "y": "hwy", "colour": "cyl"}
    assert dict(resolve(geom_point(aes(y="cty")), mpg, defaults).mapping) == {"x": "displ", "y": "cty"}
    assert dict(resolve(geom_point(aes(y=None)), mpg, defaults).mapping) == {"x": "displ"}


def test_resolve_without_inherited_mapping(mpg):
    l = layer("point", mapping=aes(x="cty", y="hwy"), inherit_aes=False)
    resolved = resolve(l, mpg, aes(x="displ", colour="class"))
    assert dict(resolved.mapping) == {"x": "cty", "y": "hwy"}


def test_resolution_order(mpg):
    mpg = mpg.assign(count=1)
    l = geom_bar(aes(x="class", y=after_stat("count"), fill="cyl", colour=literal("cyl"), alpha=0.5))
    aesthetics = resolve(l, mpg).aesthetics
    assert (aesthetics["y"].kind, aesthetics["y"].value) == (COMPUTED, "count")
    assert (aesthetics["fill"].kind, aesthetics["fill"].value) == (COLUMN, "cyl")
    assert (aesthetics["colour"].kind, aesthetics["colour"].value) == (CONSTANT, "cyl")
    assert (aesthetics["alpha"].kind, aesthetics["alpha"].value) == (CONSTANT, 0.5)


def test_string_that_is_not_a_column_is_a_constant(mpg, caplog):
    with caplog.at_level(logging.WARNING, logger="gglayers"):
        resolved = resolve(geom_point(aes(colour="blue")), mpg, aes(x="displ", y="hwy"))
    assert resolved.aesthetics["colour"].kind == CONSTANT
    assert "'blue', which is not a column" in caplog.text


def test_computed_reference_must_be_generated_by_stat(mpg):
    with pytest.raises(UnknownIdentifierError) as exc_info:
        resolve(geom_point(aes(x="displ", y=after_stat("density"))), mpg)
    assert exc_info.value.name == "density"
    with pytest.raises(UnknownIdentifierError):
        resolve(geom_bar(aes(x="class", y=after_stat("ncount"))), mpg)
    resolve(stat_bin(aes(x="displ", y=after_stat("ncount"))), mpg)


def test_validate_reports_missing_geom_aesthetic(mpg):
    resolved = resolve(geom_point(), mpg, aes(x="displ"))
    with pytest.raises(MissingAestheticError) as exc_info:
        validate_aesthetics(resolved)
    assert exc_info.value.component == "geom_point"
    assert exc_info.value.missing == ("y",)
    assert "missing aesthetics: y" in str(exc_info.value)


def test_validate_reports_missing_stat_aesthetic(mpg):
    resolved = resolve(stat_count(aes(y="hwy")), mpg)
    with pytest.raises(MissingAestheticError) as exc_info:
        validate_aesthetics(resolved)
    assert exc_info.value.component == "stat_count"
    assert exc_info.value.missing == ("x",)


def test_validate_counts_stat_defaults_and_params(mpg):
    assert validate_aesthetics(resolve(geom_bar(aes(x="class")), mpg)).geom.name == "bar"
    validate_aesthetics(resolve(geom_boxplot(aes(x="class", y="hwy")), mpg))
    validate_aesthetics(resolve(geom_point(aes(x="displ"), y=20), mpg))


def test_validate_lists_all_missing(mpg):
    with pytest.raises(MissingAestheticError) as exc_info:
        validate_aesthetics(resolve(layer("rect"), mpg))
    assert exc_info.value.missing == ("xmax", "xmin", "ymax", "ymin")


def test_evaluate(mpg):
    resolved = resolve(geom_point(aes(colour=literal("red"), size=after_stat("n")), stat="sum", shape=21), mpg, aes(x="displ", y="hwy"))
    hwy = resolved.evaluate("y")
    np.testing.assert_array_equal(hwy, mpg["hwy"].to_numpy())
    assert not hwy.flags.writeable
    assert list(resolved.evaluate("color")) == ["red"] * len(mpg)
    assert list(resolved.evaluate("shape")) == [21] * len(mpg)
    with pytest.raises(ConfigurationError, match="stat_sum"):
        resolved.evaluate("size")
    with pytest.raises(UnknownIdentifierError):
        resolved.evaluate("fill")


def test_layer_resolve_method(mpg):
    resolved = geom_point(aes(x="displ", y="hwy")).resolve(mpg)
    assert resolved.available_aes == frozenset({"x", "y"})


def test_evaluate_stat_filled_aesthetic(mpg):
    resolved = validate_aesthetics(resolve(geom_bar(aes(x="class")), mpg))
    assert "y" in resolved.available_aes
    with pytest.raises(ConfigurationError, match="'count', which only exists after stat_count"):
        resolved.evaluate("y")


def test_none_params_do_not_provide_aesthetics(mpg):
    l = geom_point(aes(x="displ"), y=None, colour="red")
    assert dict(l.params) == {"colour": "red"}
    with pytest.raises(MissingAestheticError) as exc_info:
        validate_aesthetics(resolve(l, mpg))
    assert exc_info.value.missing == ("y",)


def test_layers_compare_and_hash_without_data(mpg, economics):
    first = geom_point(aes(x="displ", y="hwy"), data=mpg, position=position_jitter(seed=1))
    second = geom_point(aes(x="displ", y="hwy"), data=economics, position=position_jitter(seed=1))
    assert first == second
    assert hash(first) == hash(second)
    assert first != geom_point(aes(x="displ", y="cty"), data=mpg)
    resolved = resolve(first)
    assert resolved == resolve(first)
    hash(resolved)
