import logging
from dataclasses import asdict, dataclass, fields
from typing import Any


logger = logging.getLogger("gglayers")
logger.addHandler(logging.NullHandler())


frozen_dataclass = dataclass(frozen=True)


def warning(msg: str) -> None:
    logger.warning(msg)


def as_nonempty_dict(data: Any) -> dict:
    return asdict(data, dict_factory=lambda x: {k: v for (k, v) in x if v is not None})


def merge(data1, data2):
    return data1.__class__(**{**as_nonempty_dict(data1), **as_nonempty_dict(data2)})


def shallow_fields(data: Any) -> dict:
    # asdict deep-copies field values, which breaks on DataFrames and callables
    return {f.name: getattr(data, f.name) for f in fields(data)}


def add_fields(base, new_fields: dict):
    return base.__class__(**{**shallow_fields(base), **new_fields})
