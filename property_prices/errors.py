"""Exception hierarchy for property searches and postcode lookups.

Every error is terminal for the call that raised it. Callers get either a
complete result or one of these.
"""


class PropertyPricesError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(PropertyPricesError, ValueError):
    """Caller input was rejected before any I/O took place."""


class RemoteQueryError(PropertyPricesError):
    """The SPARQL endpoint answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP error {status_code}: {body}")


class TransportError(PropertyPricesError):
    """The SPARQL endpoint could not be reached."""


class IncompleteRecordError(PropertyPricesError):
    """A result row is missing one of its mandatory fields."""


class NotFoundError(PropertyPricesError, LookupError):
    """A lookup key has no match in the reference table."""


class ReferenceDataError(PropertyPricesError):
    """The local postcode reference table is missing or unreadable."""
