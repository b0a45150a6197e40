"""Custom exceptions for the open-tick library."""

from enum import Enum


class OpenTickError(Exception):
    """Base exception for all open-tick errors."""

    def __init__(self, message: str, source: str | None = None):
        self.message = message
        self.source = source
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert exception to an error report entry."""
        return {
            "error": {
                "code": self.__class__.__name__.replace("Error", "").lower(),
                "message": self.message,
                "source": self.source,
            }
        }


class RowParseError(OpenTickError):
    """A CSV row could not be turned into a typed source record."""

    def __init__(self, message: str, source: str | None = None, row: int = 0):
        super().__init__(message, source)
        self.row = row

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["error"]["row"] = self.row
        return data


class UnknownSourceError(OpenTickError):
    """CSV header does not match any supported logbook export."""


class ConversionError(OpenTickError):
    """A source record could not be converted into a canonical tick.

    No conversion rule fails today. Stricter rules (grade validation, for
    example) subclass this so callers catching ConversionError keep working.
    """


class IdentityErrorKind(str, Enum):
    """Ways a service URL can fail to yield an identifier."""

    WRONG_DOMAIN = "wrong_domain"
    BAD_PATH = "bad_path"


class IdentityError(OpenTickError):
    """A service URL does not identify a route or ascent.

    Subclasses fix `kind`; building the base directly requires passing it.
    """

    kind: IdentityErrorKind | None = None

    def __init__(
        self,
        message: str,
        url: str,
        source: str | None = None,
        kind: IdentityErrorKind | None = None,
    ):
        kind = kind or self.kind
        if kind is None:
            raise TypeError(f"{type(self).__name__} requires a kind")
        super().__init__(message, source)
        self.url = url
        self.kind = IdentityErrorKind(kind)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["error"]["kind"] = self.kind.value
        data["error"]["url"] = self.url
        return data


class WrongDomainError(IdentityError):
    """URL host is not the service's canonical domain."""

    kind = IdentityErrorKind.WRONG_DOMAIN


class BadPathError(IdentityError):
    """URL path is not of the form /<segment>/<id>/..."""

    kind = IdentityErrorKind.BAD_PATH
