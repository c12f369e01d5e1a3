"""Application state owned by the barcode controller.

:class:`AppState` replaces ad-hoc module globals: it holds the rule
store, the active text mirrored from the rule field, the selected format
and the window settings, and converts to and from :class:`AppConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from barcode_tool.ui.model.config import AppConfig
from barcode_tool.ui.model.encoder import SymbolFormat
from barcode_tool.ui.model.rules import RuleStore, increment_trailing_number
from barcode_tool.util.constants import (
    DEFAULT_RULE,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
)


@dataclass
class AppState:
    rules: RuleStore = field(default_factory=RuleStore)
    active_text: str = ""
    type_index: int = 0
    is_topmost: bool = True
    window_width: float = DEFAULT_WINDOW_WIDTH
    window_height: float = DEFAULT_WINDOW_HEIGHT

    @classmethod
    def from_config(cls, config: AppConfig) -> "AppState":
        """Build the startup state, seeding the sample rule when nothing was typed."""
        type_index = config.last_type_index
        if not 0 <= type_index < len(SymbolFormat):
            type_index = 0
        return cls(
            rules=RuleStore(config.saved_rules),
            active_text=config.last_used_rule or DEFAULT_RULE,
            type_index=type_index,
            is_topmost=config.is_topmost,
            window_width=config.window_width,
            window_height=config.window_height,
        )

    def to_config(self) -> AppConfig:
        return AppConfig(
            saved_rules=self.rules.to_list(),
            last_used_rule=self.active_text,
            last_type_index=self.type_index,
            is_topmost=self.is_topmost,
            window_width=self.window_width,
            window_height=self.window_height,
        )

    @property
    def symbol_format(self) -> SymbolFormat:
        return SymbolFormat.from_index(self.type_index)

    def select_format(self, index: int) -> None:
        self.type_index = index if 0 <= index < len(SymbolFormat) else 0

    def next_rule(self) -> str:
        """Increment the trailing number of the active text and return it."""
        self.active_text = increment_trailing_number(self.active_text)
        return self.active_text

    def save_active_rule(self) -> bool:
        """Store the trimmed active text as a rule.

        Returns False (and changes nothing) for blank or already stored text.
        """
        current = self.active_text.strip()
        if not self.rules.add(current):
            return False
        self.active_text = current
        return True

    def delete_active_rule(self) -> bool:
        """Remove the active rule and fall back to the first remaining one."""
        if not self.rules.remove(self.active_text):
            return False
        self.active_text = self.rules.first()
        return True

    def set_window_size(self, width: float, height: float) -> None:
        if width > 0 and height > 0:
            self.window_width = float(width)
            self.window_height = float(height)


__all__ = ["AppState"]
