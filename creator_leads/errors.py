"""
Error taxonomy shared by the services and the HTTP layer.

Each error carries the HTTP status it maps to; the API renders every one of
them as ``{"success": false, "error": <message>}``.
"""


class CoreError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CoreError):
    """Missing or invalid field, or a value outside an enumerated domain."""
    status_code = 400


class NotFoundError(CoreError):
    """Record is absent or owned by another account. The two are indistinguishable."""
    status_code = 404


class PersistenceError(CoreError):
    """The storage layer failed. Never retried here."""
    status_code = 500
