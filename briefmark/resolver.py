"""
Briefmark — Resolvers

A resolver decides where a reference leads. Two strategies:

  EagerResolver  a closed list of {id, title} targets is supplied with the
                 text; labels are matched case-insensitively, first match wins
  LazyResolver   nothing is known up front; every reference renders unresolved
                 and the UI looks it up by label when clicked

Resolvers are pure lookups over in-memory data. They never perform IO.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from pydantic import ValidationError

from briefmark.models import ReferenceTarget
from briefmark.types import ReferenceKind, ReferenceToken, ResolvedReference

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    """Strategy the pipeline consults for reference extent and targets."""

    def candidates(self) -> Sequence[str]:
        """Known mention names, so multi-word names are captured whole."""
        ...

    def resolve(self, token: ReferenceToken) -> ResolvedReference:
        """Pair a token with its target id, or None when unknown."""
        ...


class LazyResolver:
    """Resolves nothing. Every reference renders with its raw label only."""

    def candidates(self) -> Sequence[str]:
        return ()

    def resolve(self, token: ReferenceToken) -> ResolvedReference:
        return ResolvedReference(token=token)


class EagerResolver:
    """Matches labels against a supplied list of targets."""

    def __init__(self, references: Iterable[ReferenceTarget | Mapping[str, Any]]) -> None:
        self.targets: list[ReferenceTarget] = coerce_targets(references)

    def candidates(self) -> Sequence[str]:
        return [t.title for t in self.targets if t.kind != ReferenceKind.NOTE]

    def resolve(self, token: ReferenceToken) -> ResolvedReference:
        for target in self.targets:
            if target.matches(token.kind, token.raw_label):
                return ResolvedReference(token=token, target_id=target.id, inactive=target.inactive)
        return ResolvedReference(token=token)


def coerce_targets(references: Iterable[ReferenceTarget | Mapping[str, Any]]) -> list[ReferenceTarget]:
    """
    Validate caller-supplied reference entries.

    Entries that fail validation are skipped with a warning; the rest are
    returned in their original order.
    """
    targets: list[ReferenceTarget] = []
    for entry in references:
        if isinstance(entry, ReferenceTarget):
            targets.append(entry)
            continue
        try:
            targets.append(ReferenceTarget.model_validate(entry))
        except ValidationError as e:
            logger.warning(
                "EagerResolver: skipping invalid reference %r (%d errors)",
                repr(entry)[:200],
                e.error_count(),
            )
    return targets
