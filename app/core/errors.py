"""
Error types shared by the API, workflows and services.

Each error carries the HTTP status the endpoints translate it to.
"""


class PortfolioCraftError(Exception):
    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class MissingConfigurationError(PortfolioCraftError):
    status_code = 500


class GenerationError(PortfolioCraftError):
    status_code = 502


class UnparseableResponseError(GenerationError, ValueError):
    """The model answered, but no JSON object could be recovered from the text."""


class PersistenceError(PortfolioCraftError):
    status_code = 500


class AuthError(PortfolioCraftError):
    status_code = 401


class ConflictError(PortfolioCraftError):
    status_code = 409


class NotFoundError(PortfolioCraftError):
    status_code = 404
