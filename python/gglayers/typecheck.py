from functools import wraps
from inspect import getfullargspec
from typing import Any, Union, get_args, get_origin, get_type_hints


def _checkable(annotation):
    # Any is a class on 3.11+ but cannot be used with isinstance
    if annotation is Any:
        return None
    if isinstance(annotation, type):
        return (annotation,)
    if get_origin(annotation) is Union:
        members = get_args(annotation)
        if all(isinstance(member, type) for member in members):
            return members
    # generics and the like are not checked
    return None


def typecheck(func):
    """Raise ``TypeError`` when an annotated argument has the wrong type.

    Only plain classes and unions of plain classes are checked, so ``str``,
    ``Optional[str]`` and ``Union[str, int]`` are enforced while ``Any`` or
    ``Mapping[str, Any]`` are left alone.
    """
    hints = get_type_hints(func)
    spec = getfullargspec(func)
    arg_names = spec.args + spec.kwonlyargs

    @wraps(func)
    def wrapper(*args, **kwargs):
        for kw, arg in ({k: v for k, v in zip(arg_names, args)} | kwargs).items():
            if kw not in hints:
                continue
            arg_types = _checkable(hints[kw])
            if arg_types is not None and not isinstance(arg, arg_types):
                type_names = " or ".join(t.__name__ for t in arg_types)
                raise TypeError(f"{func.__name__}: Argument '{kw}' is of type '{type_names}', but got value '{arg}' of type '{type(arg).__name__}'.")
        return func(*args, **kwargs)
    return wrapper
