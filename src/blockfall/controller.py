"""Keyboard input normalisation.

Raw press/release events arrive asynchronously from whatever front-end is in
use.  :class:`InputNormalizer` folds them into a single :class:`InputSymbol`
that the game loop samples once per tick.

While a key is held its symbol repeats on every tick; releasing it cancels the
repeat.  When several bound keys are held at once the most recently pressed
one wins, and releasing it hands control back to the next most recent key
that is still down.
"""

from __future__ import annotations

from enum import Enum
from threading import Lock
from typing import Dict, Mapping, Optional


class InputSymbol(str, Enum):
    """Discrete player intent for one tick."""

    LEFT = "left"
    RIGHT = "right"
    SOFT_DROP = "soft_drop"
    ROTATE = "rotate"
    NONE = "none"


DEFAULT_BINDINGS: Dict[str, InputSymbol] = {
    "a": InputSymbol.LEFT,
    "left": InputSymbol.LEFT,
    "d": InputSymbol.RIGHT,
    "right": InputSymbol.RIGHT,
    "s": InputSymbol.SOFT_DROP,
    "down": InputSymbol.SOFT_DROP,
    "space": InputSymbol.ROTATE,
    "up": InputSymbol.ROTATE,
}


class InputNormalizer:
    """Track held keys and expose the symbol for the current tick."""

    def __init__(self, bindings: Optional[Mapping[str, InputSymbol]] = None) -> None:
        source = DEFAULT_BINDINGS if bindings is None else bindings
        # Key names are matched case-insensitively.
        self._bindings: Dict[str, InputSymbol] = {
            key.lower(): InputSymbol(symbol) for key, symbol in source.items()
        }
        # Insertion order doubles as press order; the last key is the winner.
        self._held: Dict[str, InputSymbol] = {}
        self._lock = Lock()

    def press(self, key: str) -> None:
        """Register ``key`` as held.  Unbound keys are ignored."""

        symbol = self._bindings.get(key.lower())
        if symbol is None or symbol is InputSymbol.NONE:
            return
        with self._lock:
            # Re-pressing (OS auto-repeat) refreshes the key's recency.
            self._held.pop(key.lower(), None)
            self._held[key.lower()] = symbol

    def release(self, key: str) -> None:
        """Stop repeating ``key``.  Releasing a key that is not held is a no-op."""

        with self._lock:
            self._held.pop(key.lower(), None)

    def reset(self) -> None:
        """Forget every held key, e.g. when the window loses focus."""

        with self._lock:
            self._held.clear()

    def current(self) -> InputSymbol:
        """Return the symbol to feed into the next tick."""

        with self._lock:
            if not self._held:
                return InputSymbol.NONE
            return next(reversed(self._held.values()))

    def held_keys(self) -> list[str]:
        """Return held keys from oldest to most recent press."""

        with self._lock:
            return list(self._held)
