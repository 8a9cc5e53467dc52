"""Reference target models supplied by the caller for eager resolution."""

from __future__ import annotations

from pydantic import BaseModel, Field

from briefmark.types import ReferenceKind


class ReferenceTarget(BaseModel):
    """A known entity or note the renderer may link a reference to."""

    model_config = {"extra": "ignore", "frozen": True, "coerce_numbers_to_str": True}

    id: str = Field(min_length=1, max_length=200)
    title: str = Field(min_length=1)
    kind: ReferenceKind | None = None  # None matches both mentions and note links
    inactive: bool = False  # trashed entity / archived note

    def matches(self, kind: ReferenceKind, label: str) -> bool:
        if self.kind is not None and self.kind != kind:
            return False
        return self.title.strip().casefold() == label.casefold()
