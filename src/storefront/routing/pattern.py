"""Route pattern compilation.

A pattern is a ``/``-separated path where segments starting with ``:``
are named parameters::

    "/"              -> no parameters
    "/product/:id/"  -> ("id",), matches "/product/42/" only

Parameters match a non-empty run of characters other than ``/``.
Literal segments match exactly (case-sensitive), and a trailing ``/``
in the pattern is required in the path.
"""

import re
from dataclasses import dataclass

from storefront.errors import ConfigurationError

PARAM_MARKER = ":"
_PARAM_REGEX = "([^/]+)"


@dataclass(frozen=True, slots=True)
class Matcher:
    """A compiled route pattern."""

    pattern: str
    regex: re.Pattern[str]
    param_names: tuple[str, ...]

    def match(self, path: str) -> tuple[str, ...] | None:
        """Return captured values aligned with ``param_names``, or ``None``."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return m.groups()


def compile_pattern(pattern: str) -> Matcher:
    """Compile a route pattern into a ``Matcher``.

    Raises ``ConfigurationError`` for malformed patterns: a missing
    leading ``/``, a bare ``:`` with no name, a name that is not an
    identifier, or the same name used twice.
    """
    if not pattern.startswith("/"):
        msg = f"Route pattern {pattern!r} must start with '/'."
        raise ConfigurationError(msg)

    parts: list[str] = []
    names: list[str] = []
    for segment in pattern.split("/"):
        if not segment.startswith(PARAM_MARKER):
            parts.append(re.escape(segment))
            continue

        name = segment[len(PARAM_MARKER) :]
        if not name:
            msg = f"Route pattern {pattern!r} has an unterminated parameter marker."
            raise ConfigurationError(msg)
        if not name.isidentifier():
            msg = f"Route pattern {pattern!r} has an invalid parameter name {name!r}."
            raise ConfigurationError(msg)
        if name in names:
            msg = f"Route pattern {pattern!r} uses parameter {name!r} more than once."
            raise ConfigurationError(msg)
        names.append(name)
        parts.append(_PARAM_REGEX)

    return Matcher(
        pattern=pattern,
        regex=re.compile("/".join(parts)),
        param_names=tuple(names),
    )
