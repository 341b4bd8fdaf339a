"""
Error taxonomy shared by the data-access layer, the HTTP routes and the views.

Every error carries the HTTP status the API answers with; the views only
read ``message``.
"""


class NavigatorError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(NavigatorError):
    """Client-side input rejected before any remote call."""
    status_code = 422


class NotFound(NavigatorError):
    """Zero rows where exactly one was expected."""
    status_code = 404


class AuthError(NavigatorError):
    status_code = 401


class RemoteReadError(NavigatorError):
    status_code = 502


class RemoteWriteError(NavigatorError):
    status_code = 502


class ConfigurationError(NavigatorError):
    """Missing startup configuration. Fatal."""
    status_code = 500
