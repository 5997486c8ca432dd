class CareerSyncError(Exception):
    """Base class for errors raised by careersync services."""


class NotFound(CareerSyncError):
    pass


class Conflict(CareerSyncError):
    pass


class StorageFailure(CareerSyncError):
    """The database could not be read or written."""


class ModelUnavailable(CareerSyncError):
    """The completion endpoint failed (network error, timeout or non-2xx status)."""


class MalformedModelOutput(CareerSyncError):
    """The completion endpoint answered, but not with the expected JSON object."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw
