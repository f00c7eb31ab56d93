"""Visibility of the secondary map layer."""

from enum import Enum


class Overlay(str, Enum):
    """Whether the secondary map layer is composited."""

    SHOWN = "shown"
    HIDDEN = "hidden"

    @property
    def visible(self) -> bool:
        """True when the layer is drawn."""
        return self is Overlay.SHOWN

    def toggled(self) -> "Overlay":
        """The opposite state."""
        return Overlay.HIDDEN if self is Overlay.SHOWN else Overlay.SHOWN

    def action_label(self, layer_name: str) -> str:
        """Caption for the button that flips this state, e.g. ``Hide Airports``."""
        return f"Hide {layer_name}" if self.visible else f"Show {layer_name}"
