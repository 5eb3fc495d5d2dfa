"""HTTP client for the cocktail companion API"""

from cocktail_api.client import CocktailApiClient
from cocktail_api.exceptions import ApiRequestError, ClientValidationError, CocktailClientError

__all__ = [
    "CocktailApiClient",
    "ApiRequestError",
    "ClientValidationError",
    "CocktailClientError",
]
