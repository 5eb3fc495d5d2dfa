"""Manual assistant: pick what is in the bar, find what can be made"""

import logging
from typing import Any, Dict, List, Optional

from state.barmen import clear_search_results, find_recipes
from state.lifecycle import Action, AsyncStatus
from state.selectors import get_search_status, select_result_sections
from state.store import Store
from utils.helpers import toggle_id

logger = logging.getLogger(__name__)

MATCH_MODE = "flexible"


class ManualAssistant:
    """Ingredient selection feeding the recipe search"""

    def __init__(self, store: Store):
        self.store = store
        self.selected_ids: List[int] = []

    def toggle(self, ingredient_id: int):
        self.selected_ids = toggle_id(self.selected_ids, ingredient_id)

    def clear_selection(self):
        self.selected_ids = []

    async def find(self) -> Optional[Action]:
        """
        Search recipes for the selected ingredients

        Returns:
            The final action, or None when nothing was sent
        """
        if get_search_status(self.store.state) == AsyncStatus.LOADING or not self.selected_ids:
            return None

        logger.info(f"Searching recipes for {len(self.selected_ids)} ingredient(s)")
        return await self.store.run(find_recipes, {"inventory_ids": list(self.selected_ids), "mode": MATCH_MODE})

    def sections(self) -> List[Dict[str, Any]]:
        return select_result_sections(self.store.state)

    def close_results(self):
        self.store.dispatch(clear_search_results())
