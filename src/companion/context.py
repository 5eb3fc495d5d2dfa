"""Application context shared by every flow"""

import logging
from typing import Any, Dict, Optional

from config.settings import Settings
from cocktail_api.client import CocktailApiClient
from state.favorites import add_favorite, clear_favorites, cocktail_id_of, fetch_favorites, remove_favorite
from state.lifecycle import Action
from state.selectors import select_is_favorite, select_user_id
from state.store import Store, Subscription
from state.ui import ThemeMode, UISlice, set_language, set_theme_mode
from state.user import clear_user, login_as_guest
from companion.identity import IdentityBridge, IdentityEvents
from utils.helpers import normalize_locale
from utils.preferences import PreferenceStore, detect_language, device_language

logger = logging.getLogger(__name__)


class AppContext:
    """
    Everything a flow needs, created once at startup and passed explicitly

    Holds the settings, API client, store, preference storage and the
    identity provider. ``start()`` must run before use; ``close()`` tears
    the context down.
    """

    def __init__(
        self,
        settings: Settings,
        api: CocktailApiClient,
        store: Store,
        preferences: PreferenceStore,
        identity: IdentityEvents,
    ):
        self.settings = settings
        self.api = api
        self.store = store
        self.preferences = preferences
        self.identity = identity
        self.identity_bridge = IdentityBridge(store, identity)
        self._identity_subscription: Optional[Subscription] = None

    @classmethod
    def create(cls, settings: Settings) -> "AppContext":
        """Build the default object graph from settings"""
        identity = IdentityEvents()
        api = CocktailApiClient(settings, token_provider=identity.get_token)
        ui = UISlice(language=settings.default_language, theme_mode=ThemeMode(settings.default_theme_mode))
        store = Store(api, ui=ui)
        preferences = PreferenceStore(settings.preferences_path)
        return cls(settings, api, store, preferences, identity)

    @property
    def state(self):
        return self.store.state

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self):
        """Connect, restore the UI language and follow the identity provider"""
        await self.api.connect()

        language = detect_language(
            self.preferences.get_language(),
            device_language(),
            self.settings.get_supported_languages(),
        )
        self.store.dispatch(set_language(language))
        logger.info(f"UI language set to {language}")

        if self._identity_subscription is None:
            self._identity_subscription = self.identity_bridge.start()

    async def close(self):
        """Stop following the identity provider and close the HTTP session"""
        if self._identity_subscription is not None:
            self._identity_subscription.unsubscribe()
            self._identity_subscription = None
        await self.api.disconnect()

    # --- Preferences ---

    def set_language(self, language: str):
        """Switch the UI language and remember it for the next start"""
        language = normalize_locale(language)
        self.preferences.save_language(language)
        self.store.dispatch(set_language(language))

    def set_theme_mode(self, mode: str):
        self.store.dispatch(set_theme_mode(ThemeMode(mode)))

    # --- Session ---

    def continue_as_guest(self):
        self.store.dispatch(login_as_guest())

    async def logout(self):
        """Sign out and drop everything tied to the user"""
        self.identity.sign_out()
        # The bridge may already be stopped; clear directly as well
        self.store.dispatch(clear_user())
        self.store.dispatch(clear_favorites())
        logger.info("User logged out")

    # --- Favorites ---

    async def load_favorites(self) -> Action:
        return await self.store.run(fetch_favorites, select_user_id(self.state))

    async def toggle_favorite(self, cocktail: Dict[str, Any]) -> Action:
        """
        Add a cocktail to favorites, or remove it if it is already there

        Args:
            cocktail: Cocktail record held by the caller

        Returns:
            The final add or remove action
        """
        user_id = select_user_id(self.state)
        cocktail_id = cocktail_id_of(cocktail)
        if select_is_favorite(self.state, cocktail_id):
            return await self.store.run(remove_favorite, {"user_id": user_id, "cocktail_id": cocktail_id})
        return await self.store.run(add_favorite, {"user_id": user_id, "cocktail": cocktail})
