from difflib import get_close_matches
from typing import Iterable


class GGLayersError(Exception):
    pass


class ConfigurationError(GGLayersError, ValueError):
    """A layer or plot cannot be resolved as configured, e.g. no dataset anywhere."""


class MissingAestheticError(GGLayersError, ValueError):
    """A geom or stat requires aesthetics that are absent after merging."""

    def __init__(self, component: str, missing: Iterable[str]):
        self.component = component
        self.missing = tuple(sorted(missing))
        super().__init__(f"{component} requires the following missing aesthetics: {', '.join(self.missing)}")


class UnknownIdentifierError(GGLayersError, LookupError):
    """A geom, stat, position or computed variable name is not known."""

    def __init__(self, kind: str, name: str, choices: Iterable[str] = ()):
        self.kind = kind
        self.name = name
        self.choices = tuple(sorted(choices))
        msg = f"Unknown {kind} '{name}'"
        suggestions = get_close_matches(str(name), self.choices, n=3)
        if suggestions:
            msg += f"; did you mean {' or '.join(repr(s) for s in suggestions)}?"
        super().__init__(msg)
