"""Tests for the cocktail API client"""

import asyncio
import json

import aiohttp
import pytest
from unittest.mock import AsyncMock, MagicMock

from config.settings import Settings
from cocktail_api.client import CocktailApiClient, decode_body, extract_error_message
from cocktail_api.exceptions import ApiRequestError
from cocktail_api.models import Cocktail


def make_session(status=200, json_data=None, text=None):
    """Mock aiohttp session whose request() yields one canned response"""
    if text is None:
        text = json.dumps(json_data) if json_data is not None else ""
    response = MagicMock()
    response.status = status
    response.text = AsyncMock(return_value=text)

    session = MagicMock()
    session.request.return_value.__aenter__ = AsyncMock(return_value=response)
    session.request.return_value.__aexit__ = AsyncMock(return_value=None)
    return session


class TestCocktailApiClient:
    """Test cases for CocktailApiClient"""

    @pytest.fixture
    def mock_settings(self):
        """Mock settings for testing"""
        settings = MagicMock(spec=Settings)
        settings.api_base_url = "https://test-api.com/api"
        settings.request_timeout = 30
        return settings

    @pytest.fixture
    def client(self, mock_settings):
        """CocktailApiClient instance for testing"""
        return CocktailApiClient(mock_settings)

    def test_init(self, client, mock_settings):
        """Test client initialization"""
        assert client.settings == mock_settings
        assert client.base_url == "https://test-api.com/api"
        assert client.session is None
        assert client.timeout.total == 30

    def test_build_url(self, client):
        assert client.build_url("/cocktails/7") == "https://test-api.com/api/cocktails/7"
        assert client.build_url("favorites") == "https://test-api.com/api/favorites"

    @pytest.mark.asyncio
    async def test_get_cocktails_returns_payload_unchanged(self, client):
        payload = [
            {"cocktail_id": 1, "name": {"en": "Mojito"}, "extra_field": "kept"},
            {"cocktail_id": 2, "name": {"en": "Negroni"}},
        ]
        client.session = make_session(200, payload)

        result = await client.get_cocktails()

        assert result == payload
        method, url = client.session.request.call_args.args
        assert method == "GET"
        assert url == "https://test-api.com/api/cocktails"
        assert client.session.request.call_args.kwargs["json"] is None

    @pytest.mark.asyncio
    async def test_find_recipes_sends_wire_names(self, client):
        client.session = make_session(200, [])

        await client.find_recipes([1, 7], mode="strict")

        method, url = client.session.request.call_args.args
        assert method == "POST"
        assert url.endswith("/barmen/find-recipes")
        assert client.session.request.call_args.kwargs["json"] == {"inventoryIds": [1, 7], "mode": "strict"}

    @pytest.mark.asyncio
    async def test_guide_requests(self, client):
        client.session = make_session(200, [])

        await client.get_guide_step1("tr")
        assert client.session.request.call_args.kwargs["params"] == {"lang": "tr"}

        await client.get_guide_step3("whiskey", [55, 12])
        assert client.session.request.call_args.kwargs["json"] == {
            "family": "whiskey",
            "step2Ids": [55, 12],
            "lang": None,
        }

        await client.get_guide_results("whiskey", [55, 3])
        assert client.session.request.call_args.kwargs["json"] == {"family": "whiskey", "selectedIds": [55, 3]}

    @pytest.mark.asyncio
    async def test_roulette_pool_request(self, client):
        client.session = make_session(200, [])

        await client.get_roulette_pool("spirit", 55)

        assert client.session.request.call_args.args[1].endswith("/roulette/get-pool")
        assert client.session.request.call_args.kwargs["json"] == {"mode": "spirit", "filter": 55}

    @pytest.mark.asyncio
    async def test_favorite_requests(self, client):
        client.session = make_session(201, {"ok": True})

        await client.add_favorite(2, 154)
        assert client.session.request.call_args.kwargs["json"] == {"userId": 2, "cocktailId": 154}

        await client.remove_favorite(2, 154)
        method, url = client.session.request.call_args.args
        assert method == "DELETE"
        assert url == "https://test-api.com/api/favorites/2/154"

    @pytest.mark.asyncio
    async def test_user_requests(self, client):
        client.session = make_session(200, {"id": 5, "email": "chef@test.com"})

        user = await client.login_or_register("uid-1", "chef@test.com")
        assert user["id"] == 5
        assert client.session.request.call_args.kwargs["json"] == {"firebase_uid": "uid-1", "email": "chef@test.com"}

        await client.update_avatar(3)
        assert client.session.request.call_args.args[0] == "PUT"
        assert client.session.request.call_args.kwargs["json"] == {"avatar_id": 3}

    @pytest.mark.asyncio
    async def test_no_content_response(self, client):
        client.session = make_session(204)

        assert await client.remove_favorite(2, 154) is None

    @pytest.mark.asyncio
    async def test_plain_text_success_body(self, client):
        client.session = make_session(200, text="Favorite removed")

        assert await client.remove_favorite(2, 154) == "Favorite removed"

    @pytest.mark.asyncio
    async def test_empty_success_body(self, client):
        client.session = make_session(200, text="")

        assert await client.remove_favorite(2, 154) is None

    @pytest.mark.asyncio
    async def test_bearer_token_attached_per_request(self, mock_settings):
        token_provider = AsyncMock(side_effect=["token-1", "token-2"])
        client = CocktailApiClient(mock_settings, token_provider=token_provider)
        client.session = make_session(200, [])

        await client.get_cocktails()
        assert client.session.request.call_args.kwargs["headers"] == {"Authorization": "Bearer token-1"}

        await client.get_ingredients()
        assert client.session.request.call_args.kwargs["headers"] == {"Authorization": "Bearer token-2"}

    @pytest.mark.asyncio
    async def test_no_token_without_session(self, mock_settings):
        client = CocktailApiClient(mock_settings, token_provider=AsyncMock(return_value=None))
        client.session = make_session(200, [])

        await client.get_cocktails()

        assert client.session.request.call_args.kwargs["headers"] == {}

    @pytest.mark.asyncio
    async def test_token_error_sends_request_anyway(self, mock_settings):
        client = CocktailApiClient(mock_settings, token_provider=AsyncMock(side_effect=RuntimeError("expired")))
        client.session = make_session(200, [])

        assert await client.get_cocktails() == []
        assert client.session.request.call_args.kwargs["headers"] == {}

    @pytest.mark.asyncio
    async def test_error_message_from_body(self, client):
        client.session = make_session(404, text='{"msg": "No cocktail found"}')

        with pytest.raises(ApiRequestError, match="No cocktail found") as exc_info:
            await client.get_roulette_pool("popular")

        assert exc_info.value.status == 404
        assert not exc_info.value.is_transport_error

    @pytest.mark.asyncio
    async def test_error_without_body(self, client):
        client.session = make_session(500, text="")

        with pytest.raises(ApiRequestError, match="Request failed with status 500"):
            await client.get_cocktails()

    @pytest.mark.asyncio
    async def test_transport_error(self, client):
        client.session = MagicMock()
        client.session.request.side_effect = aiohttp.ClientConnectionError("Connection refused")

        with pytest.raises(ApiRequestError, match="Connection refused") as exc_info:
            await client.get_cocktails()

        assert exc_info.value.status is None
        assert exc_info.value.is_transport_error

    @pytest.mark.asyncio
    async def test_timeout(self, client):
        client.session = MagicMock()
        client.session.request.side_effect = asyncio.TimeoutError()

        with pytest.raises(ApiRequestError, match="Request timed out"):
            await client.get_cocktail(1)

    def test_validate_payload_valid(self, client):
        result = client.validate_payload([{"cocktail_id": 1, "name": {"en": "Mojito"}}], Cocktail)

        assert result.is_valid is True
        assert result.reason == "Payload is valid"

    def test_validate_payload_invalid_items(self, client):
        result = client.validate_payload([{"cocktail_id": 1}, {"name": "no id"}], Cocktail)

        assert result.is_valid is False
        assert result.invalid_items == [1]

    def test_validate_payload_not_a_list(self, client):
        result = client.validate_payload({"cocktail_id": 1}, Cocktail)

        assert result.is_valid is False
        assert "list" in result.reason

    @pytest.mark.asyncio
    async def test_connect_and_disconnect(self, client):
        await client.connect()
        assert isinstance(client.session, aiohttp.ClientSession)

        await client.disconnect()
        assert client.session is None


class TestExtractErrorMessage:
    """Test cases for error message extraction"""

    @pytest.mark.parametrize("body, expected", [
        ('{"error": "Favorites could not be loaded"}', "Favorites could not be loaded"),
        ('{"msg": "Not found"}', "Not found"),
        ('{"message": "Bad input"}', "Bad input"),
        ('"Plain JSON string"', "Plain JSON string"),
        ("Internal Server Error", "Internal Server Error"),
        ('{"unrelated": 1}', None),
        ("", None),
        ("   ", None),
    ])
    def test_extract(self, body, expected):
        assert extract_error_message(body) == expected


class TestDecodeBody:
    """Test cases for success body decoding"""

    @pytest.mark.parametrize("body, expected", [
        ('[{"cocktail_id": 1}]', [{"cocktail_id": 1}]),
        ('{"ok": true}', {"ok": True}),
        ("Favorite removed", "Favorite removed"),
        ("", None),
        ("  \n", None),
    ])
    def test_decode(self, body, expected):
        assert decode_body(body) == expected
