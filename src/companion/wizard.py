"""Three step guide that narrows the bar down to recipes"""

import logging
from typing import Any, List, Optional, Tuple

from state.barmen import (
    clear_guide_data,
    clear_search_results,
    fetch_guide_step1,
    fetch_guide_step2,
    fetch_guide_step3,
    fetch_wizard_results,
)
from state.store import Store
from utils.helpers import toggle_id

logger = logging.getLogger(__name__)

STEP_FAMILY = 1
STEP_MIXERS = 2
STEP_FRESH = 3
RESULTS = "results"


class GuideWizard:
    """
    Guided recipe search

    Step 1 picks a spirit family, steps 2 and 3 collect ingredient IDs, and
    finishing asks for the recipes matching all of them. Each step's options
    are fetched for the selections made so far.
    """

    def __init__(self, store: Store, lang: Optional[str] = None, min_selection: int = 1):
        self.store = store
        self.lang = lang
        self.min_selection = min_selection
        self.step: Any = STEP_FAMILY
        self.family: Optional[str] = None
        self.step2_selection: List[int] = []
        self.step3_selection: List[int] = []

    @property
    def selected_ids(self) -> List[int]:
        return self.step2_selection + self.step3_selection

    async def start(self):
        await self.store.run(fetch_guide_step1, self.lang)

    async def select_family(self, family_key: str) -> bool:
        """Pick the spirit family and load the step 2 options"""
        if not family_key:
            return False
        self.family = family_key
        action = await self.store.run(fetch_guide_step2, {"family": family_key, "lang": self.lang})
        self.step = STEP_MIXERS
        return action.type == fetch_guide_step2.fulfilled

    def toggle(self, ingredient_id: int):
        """Select or unselect an option of the current step"""
        if self.step == STEP_MIXERS:
            self.step2_selection = toggle_id(self.step2_selection, ingredient_id)
        elif self.step == STEP_FRESH:
            self.step3_selection = toggle_id(self.step3_selection, ingredient_id)

    def is_selected(self, ingredient_id: int) -> bool:
        if self.step == STEP_MIXERS:
            return ingredient_id in self.step2_selection
        if self.step == STEP_FRESH:
            return ingredient_id in self.step3_selection
        return False

    async def next(self) -> Tuple[bool, str]:
        """
        Move from step 2 to step 3

        Returns:
            Tuple of (moved, reason)
        """
        if self.step != STEP_MIXERS:
            return False, "Not on step 2"
        if not self.step2_selection:
            return False, "Select at least one ingredient"

        action = await self.store.run(
            fetch_guide_step3,
            {"family": self.family, "step2_ids": list(self.step2_selection), "lang": self.lang},
        )
        self.step = STEP_FRESH
        if action.type == fetch_guide_step3.rejected:
            return True, action.error
        return True, "Step 3 loaded"

    async def finish(self) -> Tuple[bool, str]:
        """
        Ask for recipes matching every selection

        Returns:
            Tuple of (succeeded, reason); stays on step 3 when not succeeded
        """
        if self.step != STEP_FRESH:
            return False, "Not on step 3"

        selected = self.selected_ids
        if len(selected) < self.min_selection:
            return False, f"Select at least {self.min_selection} ingredient(s)"

        action = await self.store.run(fetch_wizard_results, {"family": self.family, "selected_ids": selected})
        if action.type == fetch_wizard_results.rejected:
            logger.error(f"Guide search failed: {action.error}")
            return False, action.error

        self.step = RESULTS
        return True, "Results ready"

    def back(self) -> bool:
        """
        Go one step back

        Returns:
            False when already on the first step
        """
        if self.step == RESULTS:
            self.store.dispatch(clear_search_results())
            self.step = STEP_FRESH
        elif self.step == STEP_FRESH:
            self.step = STEP_MIXERS
        elif self.step == STEP_MIXERS:
            self.step = STEP_FAMILY
            self.step2_selection = []
            self.family = None
        else:
            return False
        return True

    def close(self):
        """Leave the guide and drop its data"""
        self.store.dispatch(clear_guide_data())
        self.step = STEP_FAMILY
        self.family = None
        self.step2_selection = []
        self.step3_selection = []
