"""
Typed mirrors of each logbook export's CSV columns.

Field aliases are the exact column headers of the export; they are the
contract with each service. Records are built by the CSV reader and handed to
the converter untouched.
"""

import datetime as dt
from enum import Enum
from typing import Any, ClassVar

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .identity import (
    MountainProjectRouteId,
    TheCragAscentId,
    TheCragRouteId,
    resolve_mountain_project_route_id,
)
from .schema import DataSource


def _empty_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# dateutil fills missing date parts from `default`; parsing against two
# defaults that differ in every date part exposes cells like "2023" or "2023-05"
_FILL_DEFAULT = dt.datetime(2000, 1, 1)
_FILL_ALTERNATE = dt.datetime(2001, 2, 2)


def _parse_timestamp(value: Any) -> Any:
    value = _empty_to_none(value)
    if not isinstance(value, str):
        return value

    try:
        parsed = date_parser.parse(value, default=_FILL_DEFAULT)
        alternate = date_parser.parse(value, default=_FILL_ALTERNATE)
    except OverflowError as e:
        raise ValueError(f"timestamp out of range: {value!r}") from e

    if parsed.date() != alternate.date():
        raise ValueError(f"incomplete date: {value!r}")
    return parsed


class SourceRecord(BaseModel):
    """Base class for one parsed row of a logbook export."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: ClassVar[DataSource]

    @classmethod
    def csv_columns(cls) -> tuple[str, ...]:
        """Column headers of the export, in export order."""
        return tuple(field.alias or name for name, field in cls.model_fields.items())

    def to_csv_row(self) -> dict[str, str]:
        """Render the record back into export columns."""
        row = self.model_dump(mode="json", by_alias=True)
        return {key: "" if value is None else str(value) for key, value in row.items()}


# ============================================================================
# Mountain Project
# ============================================================================


class MountainProjectStyle(str, Enum):
    """Styles of ascent allowed by Mountain Project."""

    ATTEMPT = "Attempt"  # only for boulders
    FLASH = "Flash"  # only for boulders
    FOLLOW = "Follow"
    LEAD = "Lead"
    SEND = "Send"  # only for boulders
    SOLO = "Solo"
    TR = "TR"


class MountainProjectLeadStyle(str, Enum):
    """Sub-styles for lead ascents."""

    FELL_HUNG = "Fell/Hung"
    FLASH = "Flash"
    ONSIGHT = "Onsight"
    PINKPOINT = "Pinkpoint"
    REDPOINT = "Redpoint"


class MountainProjectTick(SourceRecord):
    """
    A tick as recorded in an export from
    https://www.mountainproject.com/user/<userid>/<username>/tick-export
    """

    source: ClassVar[DataSource] = DataSource.MOUNTAIN_PROJECT

    date: dt.date | None = Field(None, alias="Date")
    route: str = Field(..., alias="Route")
    rating: str = Field(..., alias="Rating")
    notes: str = Field(..., alias="Notes")
    url: str | None = Field(None, alias="URL")
    pitches: int = Field(..., alias="Pitches", ge=0)
    location: str = Field(..., alias="Location")
    avg_stars: float = Field(..., alias="Avg Stars")
    your_stars: int = Field(..., alias="Your Stars")  # -1 if no rating, 1-5 otherwise
    style: MountainProjectStyle = Field(..., alias="Style")
    lead_style: MountainProjectLeadStyle | None = Field(None, alias="Lead Style")
    # comma separated, e.g. "Sport" or "Trad, TR"
    route_type: str = Field(..., alias="Route Type")
    your_rating: str = Field(..., alias="Your Rating")
    length: int | None = Field(None, alias="Length", ge=0)  # feet
    rating_code: int = Field(..., alias="Rating Code")

    @field_validator("url", "lead_style", "length", mode="before")
    @classmethod
    def blank_is_none(cls, v: Any) -> Any:
        return _empty_to_none(v)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        """Parse the tick date; the export carries no time of day."""
        parsed = _parse_timestamp(v)
        if isinstance(parsed, dt.datetime):
            return parsed.date()
        return parsed

    def route_identity(self) -> MountainProjectRouteId | None:
        """
        Resolve the route id from the URL column.

        Returns None when the row has no URL.

        Raises:
            IdentityError: URL is not a Mountain Project route URL
        """
        if self.url is None:
            return None
        return resolve_mountain_project_route_id(self.url)


# ============================================================================
# theCrag
# ============================================================================


class TheCragGearStyle(str, Enum):
    """Gear styles used by theCrag, across export schema versions."""

    AID = "Aid"
    BOULDER = "Boulder"
    SPORT = "Sport"
    TOP_ROPE = "TopRope"
    TRAD = "Trad"
    UNKNOWN = "Unknown"
    ALPINE = "Alpine"
    FREE_SOLO = "FreeSolo"
    SECOND = "Second"
    NONE = ""


class TheCragAscentType(str, Enum):
    """Ascent types used by theCrag."""

    FLASH = "Flash"
    HANGDOG = "Hangdog"
    ONSIGHT = "Onsight"
    PINKPOINT = "Pinkpoint"
    SEND = "Send"
    REDPOINT = "Redpoint"
    REPEAT = "Repeat"


class TheCragTick(SourceRecord):
    """
    A tick as recorded in an export from
    https://www.thecrag.com/climber/<username>/logbook-csv
    """

    source: ClassVar[DataSource] = DataSource.THECRAG

    route_name: str = Field(..., alias="Route Name")
    ascent_label: str = Field(..., alias="Ascent Label")
    ascent_id: int = Field(..., alias="Ascent ID", ge=0)
    ascent_link: str = Field(..., alias="Ascent Link")
    ascent_type: TheCragAscentType = Field(..., alias="Ascent Type")
    route_grade: str = Field(..., alias="Route Grade")  # as recorded in theCrag
    ascent_grade: str = Field(..., alias="Ascent Grade")  # as recorded by ticker
    route_gear_style: TheCragGearStyle = Field(..., alias="Route Gear Style")
    ascent_gear_style: TheCragGearStyle = Field(..., alias="Ascent Gear Style")
    route_height: float | None = Field(None, alias="Route Height", ge=0)  # metres
    ascent_height: float | None = Field(None, alias="Ascent Height", ge=0)  # may differ from route
    number_ascents: int = Field(..., alias="# Ascents", ge=0)
    route_stars: str = Field(..., alias="Route Stars")
    route_id: int = Field(..., alias="Route ID", ge=0)
    route_link: str = Field(..., alias="Route Link")
    country: str = Field(..., alias="Country")
    country_link: str = Field(..., alias="Country Link")
    crag_name: str = Field(..., alias="Crag Name")
    crag_link: str = Field(..., alias="Crag Link")
    crag_path: str = Field(..., alias="Crag Path")  # hierarchy of areas above route
    with_: str = Field(..., alias="With")  # people climbed with
    comment: str = Field(..., alias="Comment")
    quality: str = Field(..., alias="Quality")
    ascent_date: dt.datetime | None = Field(None, alias="Ascent Date")
    log_date: dt.datetime = Field(..., alias="Log Date")
    shot: int | None = Field(None, alias="Shot", ge=0)

    @field_validator("route_height", "ascent_height", "shot", mode="before")
    @classmethod
    def blank_is_none(cls, v: Any) -> Any:
        return _empty_to_none(v)

    @field_validator("ascent_date", "log_date", mode="before")
    @classmethod
    def parse_timestamp(cls, v: Any) -> Any:
        """Parse timestamps from the export's various formats."""
        return _parse_timestamp(v)

    def route_identity(self) -> TheCragRouteId:
        return TheCragRouteId(self.route_id)

    def ascent_identity(self) -> TheCragAscentId:
        return TheCragAscentId(self.ascent_id)


SOURCE_RECORD_TYPES: dict[DataSource, type[SourceRecord]] = {
    DataSource.MOUNTAIN_PROJECT: MountainProjectTick,
    DataSource.THECRAG: TheCragTick,
}
