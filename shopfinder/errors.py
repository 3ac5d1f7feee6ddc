"""
Errors that abort a pipeline run.

Everything else a collaborator can do wrong (geocoding miss, empty search,
denied geolocation) degrades to a default value and is only logged.
"""


class ShopFinderError(Exception):
    """Base class for user-facing failures."""


class UploadValidationError(ShopFinderError):
    """The uploaded file is too large, not an image or unreadable."""


class ConfigurationError(ShopFinderError):
    """A required credential is missing or still a placeholder."""


class RecognitionError(ShopFinderError):
    """The recognizer failed or returned something that is not a valid record."""
