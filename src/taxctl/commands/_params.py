"""Click parameter types for taxonomy paths."""

from __future__ import annotations

from typing import Any

import click

from taxctl.domain.errors import MalformedKeyError
from taxctl.domain.paths import Path, parse_path


class DomainPathType(click.ParamType):
    """``Physics/Quantum`` -> ``("Physics", "Quantum")``; ``/`` is the root.

    Use ``\\/`` for a slash inside a name and ``\\\\`` for a backslash.
    """

    name = "path"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Path:
        if isinstance(value, tuple):
            return value
        try:
            return parse_path(str(value))
        except MalformedKeyError as exc:
            self.fail(exc.reason, param, ctx)


DOMAIN_PATH = DomainPathType()
