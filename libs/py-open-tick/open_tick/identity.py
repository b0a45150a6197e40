"""
Route and ascent identifiers extracted from service URLs.

Identifiers carry identity only; nothing here looks up route or ascent data.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar
from urllib.parse import urlsplit

from .exceptions import BadPathError, WrongDomainError
from .schema import DataSource

MOUNTAIN_PROJECT_DOMAIN = "www.mountainproject.com"


@dataclass(frozen=True)
class _NumericId:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"{type(self).__name__} must wrap an int, got {self.value!r}")
        if self.value < 0:
            raise ValueError(f"{type(self).__name__} must be non-negative, got {self.value}")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class MountainProjectRouteId(_NumericId):
    """ID of a route in Mountain Project's database."""


@dataclass(frozen=True)
class TheCragRouteId(_NumericId):
    """ID of a route in theCrag's database."""


@dataclass(frozen=True)
class TheCragAscentId(_NumericId):
    """ID of an ascent in theCrag's database."""


IdT = TypeVar("IdT", bound=_NumericId)


@dataclass(frozen=True)
class UrlIdResolver(Generic[IdT]):
    """
    Extract a numeric id from URLs shaped like https://<domain>/<segment>/<id>/<slug>.

    Resolution is strict: the host must equal `domain` exactly and the first
    path segment must equal `segment`. Anything else fails rather than being
    guessed at.
    """

    source: DataSource
    domain: str
    segment: str
    id_type: Callable[[int], IdT]

    def resolve(self, url: str) -> IdT:
        """
        Resolve a URL to an id.

        Raises:
            WrongDomainError: host is not `domain`
            BadPathError: path is not /<segment>/<digits>/...
        """
        try:
            parts = urlsplit(url)
            host = parts.hostname
        except ValueError as e:
            raise WrongDomainError(
                f"Cannot read host from URL: {e}", url=url, source=self.source.value
            ) from e

        if host != self.domain:
            raise WrongDomainError(
                f"Expected host {self.domain}, got {host}", url=url, source=self.source.value
            )

        segments = parts.path.split("/")[1:]
        if not segments or segments[0] != self.segment:
            raise BadPathError(
                f"Expected path to start with /{self.segment}/", url=url, source=self.source.value
            )

        raw_id = segments[1] if len(segments) > 1 else ""
        if not (raw_id.isascii() and raw_id.isdigit()):
            raise BadPathError(
                f"Expected numeric id after /{self.segment}/, got {raw_id!r}",
                url=url,
                source=self.source.value,
            )

        return self.id_type(int(raw_id))


# "/v/<id>" short links are also valid on Mountain Project, but they may point
# at a route or an area. Tick exports never use them.
MOUNTAIN_PROJECT_ROUTE_RESOLVER: UrlIdResolver[MountainProjectRouteId] = UrlIdResolver(
    source=DataSource.MOUNTAIN_PROJECT,
    domain=MOUNTAIN_PROJECT_DOMAIN,
    segment="route",
    id_type=MountainProjectRouteId,
)


def resolve_mountain_project_route_id(url: str) -> MountainProjectRouteId:
    """
    Resolve a Mountain Project route URL to its route id.

    Example:
        >>> resolve_mountain_project_route_id(
        ...     "https://www.mountainproject.com/route/12321/route-name"
        ... )
        MountainProjectRouteId(value=12321)
    """
    return MOUNTAIN_PROJECT_ROUTE_RESOLVER.resolve(url)
