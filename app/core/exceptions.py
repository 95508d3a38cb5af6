# =============================================================================
# app/core/exceptions.py
# =============================================================================
"""
Application error taxonomy.

Each error carries a machine-readable ``error_code`` and the HTTP status it
maps to when it escapes a request handler. Handlers registered in
``app.main`` render them; write paths that must not block the user catch
them and log instead.
"""


class AppError(Exception):
    """Base application error"""
    status_code = 500
    error_code = "internal_error"

    def __init__(self, message: str, error_code: str = None):
        self.message = message
        if error_code:
            self.error_code = error_code
        super().__init__(message)


class ConfigurationError(AppError):
    """A required credential or setting is missing"""
    status_code = 500
    error_code = "configuration_error"


class UpstreamApiError(AppError):
    """Slack answered with a non-OK payload or the transport failed"""
    status_code = 502
    error_code = "slack_api_error"


class NotFoundError(AppError):
    """Unknown team or installation"""
    status_code = 404
    error_code = "not_found"


class ValidationError(AppError):
    """A required parameter is missing or malformed"""
    status_code = 400
    error_code = "validation_error"


class PersistenceError(AppError):
    """The store failed to read or write"""
    status_code = 500
    error_code = "database_error"
