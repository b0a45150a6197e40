"""Canonical, source-agnostic schema for climbing ticks."""

import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class DataSource(str, Enum):
    """Supported logbook exports."""

    MOUNTAIN_PROJECT = "mountainproject"
    THECRAG = "thecrag"


class DisciplineTag(str, Enum):
    """Style tags a route or ascent can carry."""

    AID = "aid"
    BOULDERING = "bouldering"
    DEEP_WATER_SOLO = "deep-water-solo"
    ICE = "ice"
    SPORT = "sport"
    TOP_ROPE = "top-rope"
    TRAD = "trad"
    UNKNOWN = "unknown"

    @property
    def field_name(self) -> str:
        """Name of the matching boolean attribute on Discipline."""
        return self.name.lower()


class Discipline(BaseModel):
    """
    Climbing style of a route or ascent, as a set of tags.

    A route can be several things at once (trad and top-roped, say), so every
    tag is an independent flag. `unknown` is a tag in its own right: the source
    said the style could not be determined. A Discipline with no tag set means
    the source gave nothing recognisable.
    """

    model_config = ConfigDict(frozen=True)

    aid: bool = False
    bouldering: bool = False
    deep_water_solo: bool = False
    ice: bool = False
    sport: bool = False
    top_rope: bool = False
    trad: bool = False
    unknown: bool = False

    @classmethod
    def from_tags(cls, *tags: DisciplineTag) -> "Discipline":
        """Build a Discipline with exactly the given tags set."""
        return cls(**{DisciplineTag(tag).field_name: True for tag in tags})

    @property
    def tags(self) -> frozenset[DisciplineTag]:
        """Tags that are set."""
        return frozenset(tag for tag in DisciplineTag if getattr(self, tag.field_name))

    def is_empty(self) -> bool:
        """True when no tag is set."""
        return not self.tags

    def sorted_tags(self) -> list[str]:
        """Tag values in alphabetical order."""
        return sorted(tag.value for tag in self.tags)

    def __or__(self, other: "Discipline") -> "Discipline":
        if not isinstance(other, Discipline):
            return NotImplemented
        return Discipline.from_tags(*(self.tags | other.tags))

    def __str__(self) -> str:
        return ", ".join(self.sorted_tags())


class CanonicalTick(BaseModel):
    """
    Unified record of one ascent.

    This is the canonical schema that every logbook export is converted to.
    Every field is optional: no single source populates all of them.
    """

    model_config = ConfigDict(frozen=True)

    date: datetime.date | None = Field(
        None,
        description="Calendar date the climbing happened",
    )
    route_name: str | None = Field(
        None,
        description="Name of the route",
    )
    route_location: str | None = Field(
        None,
        description="Full area hierarchy of the route (country > area > crag > sector)",
    )
    route_discipline: Discipline | None = Field(
        None,
        description="Style of the route as most often climbed",
    )
    ascent_discipline: Discipline | None = Field(
        None,
        description="Style of the route as climbed on this ascent",
    )
    route_grade: str | None = Field(
        None,
        description="Consensus grade of the route, in the source's own scale",
    )
    ascent_grade: str | None = Field(
        None,
        description="Personal grade for this ascent, in the source's own scale",
    )
    comment: str | None = Field(
        None,
        description="Free-form comments",
    )

    @field_serializer("route_discipline", "ascent_discipline")
    def serialize_discipline(self, value: Discipline | None) -> list[str] | None:
        """Render a discipline as its sorted tag values."""
        if value is None:
            return None
        return value.sorted_tags()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for downstream consumers."""
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        """Convert to JSON string."""
        return self.model_dump_json()
