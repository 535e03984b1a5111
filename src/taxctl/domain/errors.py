"""Exceptions raised by the domain layer.

Services translate these into ``ServiceError`` codes; the reducer in
:mod:`taxctl.domain.state` catches them and degrades to no-ops.
"""

from __future__ import annotations


class TaxonomyError(Exception):
    """Base class for taxonomy domain errors."""

    code = "TAXONOMY_ERROR"


class InvalidSetupError(TaxonomyError):
    """Initial root domains do not form a usable taxonomy."""

    code = "INVALID_SETUP"


class MalformedKeyError(TaxonomyError):
    """A path key (or typed path) was not produced by the path codec."""

    code = "MALFORMED_KEY"

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Malformed path key {key!r}: {reason}")
        self.key = key
        self.reason = reason
