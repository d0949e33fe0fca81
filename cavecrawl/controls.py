"""Keyboard and mouse state sampled once per frame."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

# Only one movement key counts at a time; earlier entries win.
_MOVEMENT_PRIORITY = (("w", "up"), ("a", "left"), ("s", "down"), ("d", "right"))


@dataclass
class InputState:
    """Movement, fire, escape and click flags for the current frame.

    ``escape`` stays set until the consumer clears it; everything else is
    recomputed on each update.
    """

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    fire: bool = False
    escape: bool = False
    click_left: bool = False

    def update(
        self,
        held: Iterable[str],
        escape_pressed: bool = False,
        left_clicked: bool = False,
    ) -> None:
        """Refresh the flags from held key names ("w", "a", "s", "d", "space")."""
        keys = {key.lower() for key in held}
        chosen = next(
            (name for key, name in _MOVEMENT_PRIORITY if key in keys), None
        )
        self.up = chosen == "up"
        self.left = chosen == "left"
        self.down = chosen == "down"
        self.right = chosen == "right"
        self.fire = "space" in keys
        if escape_pressed:
            self.escape = True
        self.click_left = left_clicked