"""Error types raised by the gold data services.

Route handlers switch on these to pick a status code:

    InvalidParameterError   -> 400
    NotFoundError           -> 404
    UpstreamUnavailableError -> 503
"""


class GoldDataError(Exception):
    """Base class for failures a single request can recover from."""


class UpstreamUnavailableError(GoldDataError):
    """Every upstream source failed or returned nothing."""


class InvalidParameterError(GoldDataError):
    """Caller supplied a bad unit or date; raised before any upstream call."""


class NotFoundError(GoldDataError):
    """A well-formed date request produced no record."""


class UpstreamError(Exception):
    """Transport or HTTP failure talking to the quote API."""
