"""Custom exceptions for the Couchtube application.

This module defines all custom exception classes used throughout the
application, organized by functional area and providing structured
error information for better debugging and error handling.
"""


class CouchtubeError(Exception):
    """Base class for application-specific errors."""


class ConfigLoadError(CouchtubeError):
    """Raised when a configuration or catalog file fails to load.

    Attributes:
        config_file: Path to the file that failed to load.
    """

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
    ):
        super().__init__(message)
        self.config_file = config_file


class InvalidDurationFormatError(CouchtubeError, ValueError):
    """Raised when a provider duration string cannot be parsed.

    Attributes:
        duration: The raw duration text that failed to parse.
    """

    def __init__(self, message: str, duration: str | None = None):
        super().__init__(message)
        self.duration = duration


# --- Store errors ---


class DatabaseOperationError(CouchtubeError):
    """Raised when a database read or write fails.

    Attributes:
        channel_name: The channel name associated with the error.
        video_id: The video identifier associated with the error.
    """

    def __init__(
        self,
        message: str,
        channel_name: str | None = None,
        video_id: str | None = None,
    ):
        super().__init__(message)
        self.channel_name = channel_name
        self.video_id = video_id


class ConstraintViolationError(DatabaseOperationError):
    """Raised when a write violates a store constraint.

    Covers CHECK, NOT NULL and foreign key violations, e.g. a video whose
    section_end is not greater than its section_start.
    """


class SchemaError(DatabaseOperationError):
    """Raised when the database schema cannot be created or verified."""


class NotFoundError(DatabaseOperationError):
    """Raised when a requested record does not exist."""


class ChannelNotFoundError(NotFoundError):
    """Raised when a channel is not found when expected."""


# --- Resolution errors ---


class ResolutionError(CouchtubeError):
    """Base class for failures resolving a video's full duration.

    Attributes:
        video_id: The video identifier being resolved.
    """

    def __init__(self, message: str, video_id: str | None = None):
        super().__init__(message)
        self.video_id = video_id


class VideoNotFoundError(ResolutionError):
    """Raised when the metadata provider returns no item for a video id."""


class ProviderError(ResolutionError):
    """Raised when the metadata provider call itself fails.

    Network failures, timeouts, authentication or quota errors and
    malformed responses all surface as this error.

    Attributes:
        video_id: The video identifier being resolved.
        status_code: HTTP status code returned by the provider, if any.
    """

    def __init__(
        self,
        message: str,
        video_id: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, video_id=video_id)
        self.status_code = status_code


# --- Reconciliation errors ---


class CatalogReconciliationError(CouchtubeError):
    """Raised when a population run is aborted.

    The underlying cause is always chained. By the time this is raised the
    run's transaction has been rolled back.

    Attributes:
        channel_name: The channel being processed when the run failed.
        video_id: The video being processed when the run failed.
    """

    def __init__(
        self,
        message: str,
        channel_name: str | None = None,
        video_id: str | None = None,
    ):
        super().__init__(message)
        self.channel_name = channel_name
        self.video_id = video_id
