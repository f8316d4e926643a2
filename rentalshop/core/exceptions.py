"""Custom exceptions for the rental-shop contract engine."""


class RentalShopException(Exception):
    """Base exception for the rental-shop application."""
    
    pass


class NotFoundError(RentalShopException):
    """Raised when a resource is not found."""
    
    pass


class ConfigurationError(RentalShopException):
    """Raised when configuration is invalid."""
    
    pass


class SessionNotReadyError(RentalShopException):
    """Raised when a draft is mutated while reference data is loading or a submit is in flight."""
    
    pass


class TransportError(RentalShopException):
    """Raised when the REST API call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
