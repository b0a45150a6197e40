"""
Open Tick Library

Converts climbing logbook exports (Mountain Project, theCrag) into a single
canonical, source-agnostic tick format.
"""

from .converter import ConversionOutcome, convert, convert_many
from .exceptions import (
    BadPathError,
    ConversionError,
    IdentityError,
    IdentityErrorKind,
    OpenTickError,
    RowParseError,
    UnknownSourceError,
    WrongDomainError,
)
from .identity import (
    MountainProjectRouteId,
    TheCragAscentId,
    TheCragRouteId,
    resolve_mountain_project_route_id,
)
from .schema import CanonicalTick, DataSource, Discipline, DisciplineTag
from .taxonomy import discipline_from_mountain_project, discipline_from_thecrag, map_discipline
from .vendor_schemas import MountainProjectTick, TheCragTick

__version__ = "0.1.0"

__all__ = [
    "CanonicalTick",
    "Discipline",
    "DisciplineTag",
    "DataSource",
    "MountainProjectTick",
    "TheCragTick",
    "convert",
    "convert_many",
    "ConversionOutcome",
    "discipline_from_mountain_project",
    "discipline_from_thecrag",
    "map_discipline",
    "resolve_mountain_project_route_id",
    "MountainProjectRouteId",
    "TheCragRouteId",
    "TheCragAscentId",
    "OpenTickError",
    "ConversionError",
    "IdentityError",
    "IdentityErrorKind",
    "WrongDomainError",
    "BadPathError",
    "RowParseError",
    "UnknownSourceError",
]
