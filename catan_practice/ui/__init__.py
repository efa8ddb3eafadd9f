"""Terminal front end."""

from .labels import current_player_label, phase_label, player_label

__all__ = ["current_player_label", "phase_label", "player_label"]
