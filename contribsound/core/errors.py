from __future__ import annotations


class ContribSoundError(Exception):
    """Base error. `status_code` is the response a boundary caller should map it to."""

    status_code: int = 500


class ConfigurationError(ContribSoundError, ValueError):
    """Raised for out-of-range render parameters or missing settings."""

    status_code = 400


class InvalidYearError(ConfigurationError):
    """Raised when a year outside the user's active years is requested."""


class EmptyInputError(ContribSoundError):
    """Raised when the contribution source returns no days to sonify."""

    status_code = 404


class DataFetchError(ContribSoundError):
    """Raised when contribution data cannot be fetched or decoded."""

    status_code = 502


class UserNotFoundError(DataFetchError):
    status_code = 404


class TranscodeError(ContribSoundError):
    """Raised when the external encoder fails or is missing."""

    status_code = 500
