"""Root store composing every state container"""

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from cocktail_api.client import CocktailApiClient
from state.barmen import BarmenSlice, BarmenState
from state.cocktails import CocktailsSlice, CocktailsState
from state.favorites import FavoritesSlice, FavoritesState
from state.ingredients import IngredientsSlice
from state.lifecycle import Action, AsyncAction, FetchState, Slice
from state.roulette import RouletteSlice, RouletteState
from state.ui import UISlice, UIState
from state.user import UserSlice, UserState

logger = logging.getLogger(__name__)

Listener = Callable[[Action], None]


@dataclass
class RootState:
    """The whole client state tree"""
    cocktails: CocktailsState
    ingredients: FetchState
    barmen: BarmenState
    roulette: RouletteState
    favorites: FavoritesState
    user: UserState
    ui: UIState


class Subscription:
    """Handle returned by a subscribe call; cancel it with ``unsubscribe()``"""

    def __init__(self, on_cancel: Optional[Callable[[], None]] = None):
        self._on_cancel = on_cancel
        self.active = True

    def unsubscribe(self):
        if not self.active:
            return
        self.active = False
        if self._on_cancel is not None:
            self._on_cancel()
            self._on_cancel = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.unsubscribe()


class Store:
    """
    Single dispatch entry point over all state containers

    Every action is offered to each slice; a slice ignores the types it does
    not handle. Listeners run after the state has been updated.
    """

    def __init__(self, api: Optional[CocktailApiClient] = None, ui: Optional[UISlice] = None):
        self.api = api
        self.slices: List[Slice] = [
            CocktailsSlice(),
            IngredientsSlice(),
            BarmenSlice(),
            RouletteSlice(),
            FavoritesSlice(),
            UserSlice(),
            ui or UISlice(),
        ]
        self.state = RootState(**{s.name: s.initial_state() for s in self.slices})
        self._listeners: List[Listener] = []
        self._request_ids = itertools.count(1)

    def next_request_id(self) -> int:
        return next(self._request_ids)

    def dispatch(self, action: Action) -> Action:
        """
        Apply an action to the state tree

        Args:
            action: Action to apply

        Returns:
            The same action
        """
        handled = False
        for slice_ in self.slices:
            if slice_.reduce(getattr(self.state, slice_.name), action):
                handled = True

        if not handled:
            logger.debug(f"No container handles action {action.type}")

        for listener in list(self._listeners):
            listener(action)
        return action

    async def run(self, async_action: AsyncAction, arg: Any = None) -> Action:
        """Run an async action against this store"""
        return await async_action.run(self, arg)

    def subscribe(self, listener: Listener) -> Subscription:
        """Call ``listener`` after every dispatched action"""
        self._listeners.append(listener)

        def remove():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(remove)

    def reset(self):
        """Put every container back to its initial state"""
        self.state = RootState(**{s.name: s.initial_state() for s in self.slices})
