"""Cocktail roulette: pick a pool, spin, get a winner"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from state.roulette import CUSTOM_MODE, FILTERED_MODES, POOL_MODES, clear_roulette, fetch_roulette_pool, set_custom_pool, set_winner
from state.selectors import get_roulette_error, select_cocktails_by_ids, select_roulette_pool
from state.store import Store

logger = logging.getLogger(__name__)

MENU = "menu"
FILTER = "filter"
WHEEL = "wheel"

MIN_TURNS = 5
EXTRA_TURNS = 3


@dataclass
class SpinResult:
    """Outcome of one spin"""
    winner: Dict[str, Any]
    index: int
    # Full turns the wheel animates through; has no bearing on the winner
    rotation: float


class RouletteGame:
    """Mode selection, pool loading and spinning"""

    def __init__(
        self,
        store: Store,
        rng: Optional[random.Random] = None,
        min_custom_selection: int = 2,
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.min_custom_selection = min_custom_selection
        self.step = MENU
        self.mode: Optional[str] = None
        self.error: Optional[str] = None

    @property
    def pool(self) -> List[Dict[str, Any]]:
        return select_roulette_pool(self.store.state) or []

    async def select_mode(self, mode: str) -> str:
        """
        Choose where the pool comes from

        Args:
            mode: One of the server pool modes, or "custom"

        Returns:
            The step the game moved to
        """
        if mode != CUSTOM_MODE and mode not in POOL_MODES:
            raise ValueError(f"Unknown roulette mode: {mode}")

        self.mode = mode
        self.error = None
        if mode == CUSTOM_MODE:
            # Waits for choose_custom()
            return self.step
        if mode in FILTERED_MODES:
            self.step = FILTER
            return self.step

        await self._load_pool(mode, None)
        return self.step

    async def choose_filter(self, value: Union[int, str]) -> str:
        """Pick the spirit or taste for a filtered mode and load the pool"""
        if self.mode not in FILTERED_MODES:
            raise ValueError(f"Mode {self.mode} does not take a filter")
        await self._load_pool(self.mode, value)
        return self.step

    def choose_custom(self, cocktail_ids: List[int]) -> Tuple[bool, str]:
        """
        Use a hand-picked selection of loaded cocktails as the pool

        Args:
            cocktail_ids: IDs picked from the cocktail list

        Returns:
            Tuple of (accepted, reason); nothing changes when not accepted
        """
        if not cocktail_ids or len(cocktail_ids) < self.min_custom_selection:
            return False, f"Please select at least {self.min_custom_selection} cocktails"

        selected = select_cocktails_by_ids(self.store.state, cocktail_ids)
        if len(selected) < self.min_custom_selection:
            return False, f"Please select at least {self.min_custom_selection} cocktails"

        self.mode = CUSTOM_MODE
        self.error = None
        self.store.dispatch(set_custom_pool(selected))
        self.step = WHEEL
        logger.info(f"Custom roulette pool with {len(selected)} cocktails")
        return True, "Pool ready"

    async def _load_pool(self, mode: str, filter_value: Any):
        self.step = WHEEL
        action = await self.store.run(fetch_roulette_pool, {"mode": mode, "filter": filter_value})
        if action.type == fetch_roulette_pool.rejected:
            self.error = get_roulette_error(self.store.state) or action.error
            self.step = MENU
            logger.warning(f"Roulette pool for {mode} failed: {self.error}")

    def spin(self) -> Optional[SpinResult]:
        """
        Pick the winner, then the cosmetic rotation for the wheel

        Returns:
            The spin result, or None when the pool is empty
        """
        pool = self.pool
        if not pool:
            return None

        index = int(self.rng.random() * len(pool))
        winner = pool[index]
        self.store.dispatch(set_winner(winner))

        rotation = MIN_TURNS + self.rng.random() * EXTRA_TURNS
        return SpinResult(winner=winner, index=index, rotation=rotation)

    def reset(self):
        """Back to mode selection with an empty wheel"""
        self.store.dispatch(clear_roulette())
        self.step = MENU
        self.mode = None
        self.error = None
