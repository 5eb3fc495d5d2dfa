"""Exceptions raised by the cocktail API client"""

from typing import Optional


class CocktailClientError(Exception):
    """Base exception for client-side errors"""
    pass


class ClientValidationError(CocktailClientError):
    """Request rejected locally before any network call"""
    pass


class ApiRequestError(CocktailClientError):
    """Transport failure or error status returned by the API"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status

    @property
    def is_transport_error(self) -> bool:
        return self.status is None
