"""Roulette pool container"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from cocktail_api.exceptions import ClientValidationError
from state.lifecycle import ActionCreator, AsyncAction, FetchState, Slice, handles

POOL_MODES = ("popular", "spirit", "taste", "driver", "random")
FILTERED_MODES = ("spirit", "taste")
CUSTOM_MODE = "custom"


async def _fetch_roulette_pool(arg, store):
    arg = arg or {}
    mode = arg.get("mode")
    if mode not in POOL_MODES:
        raise ClientValidationError(f"Unknown roulette mode: {mode}")

    # The backend only reads a filter for spirit and taste pools
    filter_value = arg.get("filter") if mode in FILTERED_MODES else None
    return await store.api.get_roulette_pool(mode, filter_value)


fetch_roulette_pool = AsyncAction("roulette/fetch_pool", _fetch_roulette_pool)

clear_roulette = ActionCreator("roulette/clear")
set_winner = ActionCreator("roulette/set_winner")
set_custom_pool = ActionCreator("roulette/set_custom_pool")


@dataclass
class RouletteState:
    pool: FetchState = field(default_factory=lambda: FetchState(data=[]))
    mode: Optional[str] = None
    winner: Optional[Dict[str, Any]] = None


class RouletteSlice(Slice):
    """Cocktails on the wheel and the one it landed on"""

    name = "roulette"
    tracks = {fetch_roulette_pool: "pool"}

    def initial_state(self) -> RouletteState:
        return RouletteState()

    @handles(fetch_roulette_pool.pending)
    def _pool_pending(self, state, action):
        state.mode = (action.arg or {}).get("mode")
        state.winner = None

    @handles(clear_roulette.type)
    def _clear(self, state, action):
        state.pool.reset([])
        state.mode = None
        state.winner = None

    @handles(set_winner.type)
    def _set_winner(self, state, action):
        state.winner = action.payload

    @handles(set_custom_pool.type)
    def _set_custom_pool(self, state, action):
        state.pool.reset([])
        state.pool.succeed(list(action.payload or []))
        state.mode = CUSTOM_MODE
        state.winner = None
