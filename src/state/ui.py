"""UI preference container"""

from dataclasses import dataclass
from enum import Enum

from state.lifecycle import ActionCreator, Slice, handles

DEFAULT_LANGUAGE = "en"


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


set_language = ActionCreator("ui/set_language")
set_theme_mode = ActionCreator("ui/set_theme_mode")


@dataclass
class UIState:
    language: str = DEFAULT_LANGUAGE
    theme_mode: ThemeMode = ThemeMode.LIGHT


class UISlice(Slice):
    """Process-wide language and theme"""

    name = "ui"

    def __init__(self, language: str = DEFAULT_LANGUAGE, theme_mode: ThemeMode = ThemeMode.LIGHT):
        self.language = language
        self.theme_mode = ThemeMode(theme_mode)

    def initial_state(self) -> UIState:
        return UIState(language=self.language, theme_mode=self.theme_mode)

    @handles(set_language.type)
    def _set_language(self, state, action):
        state.language = action.payload or DEFAULT_LANGUAGE

    @handles(set_theme_mode.type)
    def _set_theme_mode(self, state, action):
        state.theme_mode = ThemeMode(action.payload)
