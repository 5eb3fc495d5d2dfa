"""Cocktail companion API client"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, Union

import aiohttp
from pydantic import BaseModel, ValidationError

from config.settings import Settings
from cocktail_api.exceptions import ApiRequestError
from cocktail_api.models import (
    AddFavoriteRequest,
    AvatarRequest,
    Cocktail,
    FavoriteEntry,
    FindRecipesRequest,
    GuideResultsRequest,
    GuideStep2Request,
    GuideStep3Request,
    Ingredient,
    LoginRequest,
    MenuHintsRequest,
    PayloadValidationResult,
    RecipeMatch,
    RoulettePoolRequest,
    UserRecord,
)

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Awaitable[Optional[str]]]

# Keys the backend uses for error messages, in lookup order
ERROR_MESSAGE_KEYS = ('error', 'msg', 'message', 'detail')


def decode_body(body: str) -> Any:
    """
    Decode a successful response body

    Args:
        body: Raw response text

    Returns:
        None for an empty body, the parsed JSON when it parses, else the text
    """
    if not body or not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError:
        return body


def extract_error_message(body: str) -> Optional[str]:
    """
    Pull a human readable message out of an error response body

    Args:
        body: Raw response text

    Returns:
        Message from the body, or None when the body carries none
    """
    body = (body or '').strip()
    if not body:
        return None

    try:
        data = json.loads(body)
    except ValueError:
        return body

    if isinstance(data, str):
        return data.strip() or None
    if isinstance(data, dict):
        for key in ERROR_MESSAGE_KEYS:
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


class CocktailApiClient:
    """Client for the cocktail companion backend"""

    def __init__(self, settings: Settings, token_provider: Optional[TokenProvider] = None):
        self.settings = settings
        self.base_url = settings.api_base_url
        self.token_provider = token_provider
        self.session: Optional[aiohttp.ClientSession] = None

        self.headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        }

        self.timeout = aiohttp.ClientTimeout(total=settings.request_timeout)

    async def __aenter__(self):
        """Async context manager entry"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.disconnect()

    async def connect(self):
        """Initialize HTTP session"""
        if self.session is None:
            self.session = aiohttp.ClientSession(headers=self.headers, timeout=self.timeout)

    async def disconnect(self):
        """Close HTTP session"""
        if self.session:
            await self.session.close()
            self.session = None

    def build_url(self, path: str) -> str:
        """Join an endpoint path onto the API base URL"""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _auth_headers(self) -> Dict[str, str]:
        """Fetch a fresh bearer token for the signed-in user, if any"""
        if self.token_provider is None:
            return {}

        try:
            token = await self.token_provider()
        except Exception as e:
            # The request still goes out, just without credentials
            logger.error(f"Auth token error: {e}")
            return {}

        if not token:
            return {}
        return {'Authorization': f'Bearer {token}'}

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[BaseModel] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send one request and decode the response

        Args:
            method: HTTP method
            path: Endpoint path relative to the API base URL
            payload: Request body model, sent with its wire aliases
            params: Query string parameters

        Returns:
            Decoded response body, unchanged

        Raises:
            ApiRequestError: On transport failure or non-2xx status
        """
        if not self.session:
            await self.connect()

        url = self.build_url(path)
        body = payload.model_dump(by_alias=True) if payload is not None else None
        headers = await self._auth_headers()

        logger.debug(f"{method} {url}")

        try:
            async with self.session.request(method, url, json=body, params=params, headers=headers) as response:
                if 200 <= response.status < 300:
                    if response.status == 204:
                        return None
                    return decode_body(await response.text())

                error_text = await response.text()
                message = extract_error_message(error_text) or f"Request failed with status {response.status}"
                logger.error(f"{method} {url} failed. Status: {response.status}, Error: {error_text}")
                raise ApiRequestError(message, status=response.status)

        except aiohttp.ClientError as e:
            logger.error(f"Network error during {method} {url}: {e}")
            raise ApiRequestError(str(e) or e.__class__.__name__) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout during {method} {url}")
            raise ApiRequestError("Request timed out") from e

    def validate_payload(
        self,
        data: Any,
        model: Type[BaseModel],
        many: bool = True,
    ) -> PayloadValidationResult:
        """
        Check a response payload against the expected entity model

        Args:
            data: Decoded response body
            model: Entity model each record should satisfy
            many: Whether the payload is a list of records

        Returns:
            Validation result; the payload itself is never modified
        """
        if many:
            if not isinstance(data, list):
                return PayloadValidationResult(is_valid=False, reason="Expected a list payload")
            records = data
        else:
            records = [data]

        invalid = []
        for index, record in enumerate(records):
            try:
                model.model_validate(record)
            except ValidationError:
                invalid.append(index)

        if invalid:
            return PayloadValidationResult(
                is_valid=False,
                reason=f"{len(invalid)} record(s) do not match {model.__name__}",
                invalid_items=invalid,
            )
        return PayloadValidationResult(is_valid=True, reason="Payload is valid")

    def _check_shape(self, data: Any, model: Type[BaseModel], many: bool = True) -> Any:
        result = self.validate_payload(data, model, many=many)
        if not result.is_valid:
            logger.warning(f"Unexpected {model.__name__} payload: {result.reason}")
        return data

    # --- Cocktails ---

    async def get_cocktails(self) -> List[Dict[str, Any]]:
        """List all cocktails"""
        data = await self._request('GET', '/cocktails')
        return self._check_shape(data, Cocktail)

    async def get_cocktail(self, cocktail_id: int) -> Dict[str, Any]:
        """
        Get a single cocktail with its ingredients

        Args:
            cocktail_id: Cocktail ID

        Returns:
            Detailed cocktail record
        """
        data = await self._request('GET', f'/cocktails/{cocktail_id}')
        return self._check_shape(data, Cocktail, many=False)

    # --- Ingredients ---

    async def get_ingredients(self) -> List[Dict[str, Any]]:
        """Get the categorized ingredient catalog"""
        data = await self._request('GET', '/ingredients')
        return self._check_shape(data, Ingredient)

    # --- Barmen ---

    async def find_recipes(self, inventory_ids: List[int], mode: str = "flexible") -> List[Dict[str, Any]]:
        """
        Find recipes that can be made from an ingredient inventory

        Args:
            inventory_ids: IDs of ingredients the user has
            mode: Matching mode understood by the backend

        Returns:
            Matching cocktails, each with a missing_count
        """
        request = FindRecipesRequest(inventory_ids=inventory_ids, mode=mode)
        data = await self._request('POST', '/barmen/find-recipes', request)
        return self._check_shape(data, RecipeMatch)

    async def get_menu_hints(self, base_spirit_ids: List[int]) -> Any:
        """Get hints for the given base spirits"""
        request = MenuHintsRequest(base_spirit_ids=base_spirit_ids)
        return await self._request('POST', '/barmen/hints', request)

    async def get_guide_step1(self, lang: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get spirit families offered by the first guide step"""
        params = {'lang': lang} if lang else None
        return await self._request('GET', '/barmen/guide/step-1', params=params)

    async def get_guide_step2(self, family: str, lang: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get second step options for a spirit family"""
        request = GuideStep2Request(family=family, lang=lang)
        return await self._request('POST', '/barmen/guide/step-2', request)

    async def get_guide_step3(
        self,
        family: str,
        step2_ids: List[int],
        lang: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Get third step options scoped by the family and the step 2 picks"""
        request = GuideStep3Request(family=family, step2_ids=step2_ids, lang=lang)
        return await self._request('POST', '/barmen/guide/step-3', request)

    async def get_guide_results(self, family: str, selected_ids: List[int]) -> List[Dict[str, Any]]:
        """Get the recipes matching everything picked in the guide"""
        request = GuideResultsRequest(family=family, selected_ids=selected_ids)
        data = await self._request('POST', '/barmen/guide/results', request)
        return self._check_shape(data, RecipeMatch)

    # --- Roulette ---

    async def get_roulette_pool(
        self,
        mode: str,
        filter_value: Optional[Union[int, str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get a shuffled pool of cocktails for the roulette

        Args:
            mode: Pool mode (popular, spirit, taste, driver, random)
            filter_value: Spirit ID or taste name for the spirit/taste modes

        Returns:
            Cocktails in the order the backend shuffled them
        """
        request = RoulettePoolRequest(mode=mode, filter=filter_value)
        data = await self._request('POST', '/roulette/get-pool', request)
        return self._check_shape(data, Cocktail)

    # --- Favorites ---

    async def get_favorites(self, user_id: Union[int, str]) -> List[Dict[str, Any]]:
        """List a user's favorite cocktails"""
        data = await self._request('GET', f'/favorites/{user_id}')
        return self._check_shape(data, FavoriteEntry)

    async def add_favorite(self, user_id: Union[int, str], cocktail_id: int) -> Any:
        """Save a cocktail to a user's favorites"""
        request = AddFavoriteRequest(user_id=user_id, cocktail_id=cocktail_id)
        return await self._request('POST', '/favorites', request)

    async def remove_favorite(self, user_id: Union[int, str], cocktail_id: int) -> Any:
        """Remove a cocktail from a user's favorites"""
        return await self._request('DELETE', f'/favorites/{user_id}/{cocktail_id}')

    # --- Users ---

    async def login_or_register(self, firebase_uid: str, email: Optional[str] = None) -> Dict[str, Any]:
        """
        Find or create the backend user for an identity provider account

        Args:
            firebase_uid: Identity provider user ID
            email: Account email

        Returns:
            User record
        """
        request = LoginRequest(firebase_uid=firebase_uid, email=email)
        data = await self._request('POST', '/users/loginOrRegister', request)
        return self._check_shape(data, UserRecord, many=False)

    async def update_avatar(self, avatar_id: Union[int, str]) -> Dict[str, Any]:
        """Change the signed-in user's avatar"""
        request = AvatarRequest(avatar_id=avatar_id)
        return await self._request('PUT', '/users/me/avatar', request)
