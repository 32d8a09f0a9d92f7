"""Custom exceptions for the PrepTive application."""


class PreptiveAppError(Exception):
    """Base exception for PrepTive application."""

    pass


class QueryServiceError(PreptiveAppError):
    """Exception raised when the remote query service returns an error."""

    def __init__(self, status_code: int, message: str, response_text: str = ""):
        self.status_code = status_code
        self.message = message
        self.response_text = response_text
        super().__init__(f"Query service error {status_code}: {message}")


class ConfigurationError(PreptiveAppError):
    """Exception raised for configuration errors."""

    pass


class NetworkError(PreptiveAppError):
    """Exception raised for network/connection errors."""

    pass
