"""
Discipline taxonomy mapping.

Maps each source's style vocabulary onto the canonical Discipline tags. The
vocabularies are data: adding a token that a source starts exporting means
adding an entry to its table, not touching the conversion logic.

Mapping never fails. Both vocabularies grow over time, so an unrecognised
token is treated as lost information:

- Mountain Project route types are free text ("Trad, TR", "Boulder"), matched
  by substring. Text matching no known token is ignored.
- theCrag gear styles are one value from a closed, versioned list. Values not
  in the table (Alpine, FreeSolo, Second, empty, or anything newer) map to the
  `unknown` tag.
"""

from types import MappingProxyType
from typing import Mapping

from .schema import DataSource, Discipline, DisciplineTag
from .vendor_schemas import TheCragGearStyle

MOUNTAIN_PROJECT_ROUTE_TYPE_TOKENS: Mapping[str, DisciplineTag] = MappingProxyType(
    {
        "Boulder": DisciplineTag.BOULDERING,
        "Sport": DisciplineTag.SPORT,
        "TR": DisciplineTag.TOP_ROPE,
        "Trad": DisciplineTag.TRAD,
        "Unknown": DisciplineTag.UNKNOWN,
    }
)

THECRAG_GEAR_STYLE_TAGS: Mapping[str, DisciplineTag] = MappingProxyType(
    {
        TheCragGearStyle.AID.value: DisciplineTag.AID,
        TheCragGearStyle.BOULDER.value: DisciplineTag.BOULDERING,
        TheCragGearStyle.SPORT.value: DisciplineTag.SPORT,
        TheCragGearStyle.TOP_ROPE.value: DisciplineTag.TOP_ROPE,
        TheCragGearStyle.TRAD.value: DisciplineTag.TRAD,
        TheCragGearStyle.UNKNOWN.value: DisciplineTag.UNKNOWN,
    }
)


def discipline_from_mountain_project(route_type: str) -> Discipline:
    """
    Map a Mountain Project "Route Type" value to a Discipline.

    Every known token contained in the text sets its tag.

    Example:
        >>> discipline_from_mountain_project("Trad, TR").sorted_tags()
        ['top-rope', 'trad']
    """
    return Discipline.from_tags(
        *(tag for token, tag in MOUNTAIN_PROJECT_ROUTE_TYPE_TOKENS.items() if token in route_type)
    )


def discipline_from_thecrag(gear_style: TheCragGearStyle | str) -> Discipline:
    """
    Map a theCrag gear style to a Discipline with exactly one tag set.

    Styles outside the table map to `unknown`.
    """
    token = gear_style.value if isinstance(gear_style, TheCragGearStyle) else gear_style
    return Discipline.from_tags(THECRAG_GEAR_STYLE_TAGS.get(token, DisciplineTag.UNKNOWN))


def map_discipline(source: DataSource, token: TheCragGearStyle | str) -> Discipline:
    """Map a style token from the given source to a Discipline."""
    source = DataSource(source)
    if source is DataSource.MOUNTAIN_PROJECT:
        return discipline_from_mountain_project(getattr(token, "value", token))
    return discipline_from_thecrag(token)
