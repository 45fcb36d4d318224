"""
Exceptions raised by the atlas services and mapped to HTTP responses by the web layer.
"""


class AtlasError(Exception):
    """Base exception for geo_atlas errors"""
    status_code = 500


class ValidationError(AtlasError):
    """Raised when request input fails validation"""
    status_code = 400


class NotFoundError(AtlasError):
    """Raised when a requested record does not exist"""
    status_code = 404


class UploadError(AtlasError):
    """Raised when an uploaded file cannot be used, e.g. a CSV without data rows"""
    status_code = 400


class ConfigError(ValueError):
    """Raised when the configuration file is malformed"""
    pass
