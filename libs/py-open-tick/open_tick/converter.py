"""Conversion functions from logbook export records to canonical ticks."""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Literal

from .exceptions import ConversionError
from .schema import CanonicalTick
from .taxonomy import discipline_from_mountain_project, discipline_from_thecrag
from .vendor_schemas import MountainProjectTick, SourceRecord, TheCragTick

ErrorPolicy = Literal["skip", "abort"]


def convert(record: SourceRecord) -> CanonicalTick:
    """
    Convert one source record to a canonical tick.

    This function dispatches to source-specific converters.

    Args:
        record: Parsed row of a logbook export

    Returns:
        CanonicalTick

    Raises:
        ConversionError: the record cannot be represented canonically
        TypeError: the object is not a supported source record
    """
    converter = _CONVERTERS.get(type(record))
    if converter is None:
        raise TypeError(f"No converter for record type: {type(record).__name__}")

    return converter(record)


def convert_mountain_project(record: MountainProjectTick) -> CanonicalTick:
    """
    Convert a Mountain Project tick to a canonical tick.

    Mountain Project only records how a route is usually climbed ("Route
    Type"), never how this ascent was climbed, so `ascent_discipline` is left
    absent rather than guessed from the route.
    """
    return CanonicalTick(
        date=record.date,
        route_name=record.route,
        route_location=record.location,
        route_discipline=discipline_from_mountain_project(record.route_type),
        ascent_discipline=None,
        route_grade=record.rating,
        ascent_grade=record.your_rating,
        comment=record.notes,
    )


def convert_thecrag(record: TheCragTick) -> CanonicalTick:
    """
    Convert a theCrag tick to a canonical tick.

    theCrag provides:
    - separate route and ascent gear styles, mapped independently
    - the full area hierarchy ("Crag Path"), used as location because crag
      names repeat between regions
    - an optional ascent timestamp and a mandatory log timestamp. Only the
      ascent timestamp says when the climb happened; without it the date is
      absent.
    """
    ascent_date = record.ascent_date.date() if record.ascent_date is not None else None

    return CanonicalTick(
        date=ascent_date,
        route_name=record.route_name,
        route_location=record.crag_path,
        route_discipline=discipline_from_thecrag(record.route_gear_style),
        ascent_discipline=discipline_from_thecrag(record.ascent_gear_style),
        route_grade=record.route_grade,
        ascent_grade=record.ascent_grade,
        comment=record.comment,
    )


_CONVERTERS: dict[type[SourceRecord], Callable[..., CanonicalTick]] = {
    MountainProjectTick: convert_mountain_project,
    TheCragTick: convert_thecrag,
}


@dataclass(frozen=True)
class ConversionOutcome:
    """Result of converting one record in a batch."""

    index: int
    tick: CanonicalTick | None = None
    error: ConversionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def convert_many(
    records: Iterable[SourceRecord],
    *,
    on_error: ErrorPolicy = "skip",
) -> Iterator[ConversionOutcome]:
    """
    Convert records one by one, in input order.

    Records share no state, so a failing record never affects the others.

    Args:
        records: Parsed rows of a logbook export
        on_error: "skip" reports the failure in the outcome and continues,
            "abort" re-raises it

    Yields:
        ConversionOutcome per record
    """
    if on_error not in ("skip", "abort"):
        raise ValueError(f"Unsupported error policy: {on_error}")

    for index, record in enumerate(records):
        try:
            tick = convert(record)
        except ConversionError as e:
            if on_error == "abort":
                raise
            yield ConversionOutcome(index=index, error=e)
            continue
        yield ConversionOutcome(index=index, tick=tick)
