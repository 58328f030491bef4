"""
Hotkeys

Keyboard shortcuts of the playground. Key combinations are normalized to
lower-case strings with modifiers in a fixed order, e.g. "ctrl+shift+n".
"""
from typing import Callable, Dict, Iterable, Optional

from src.utils.message import Log

# Action name -> key combination
DEFAULT_SHORTCUTS: Dict[str, str] = {
    "add_scene": "shift+n",
    "delete_scene": "delete",
    "seek_backward": "arrowleft",
    "seek_forward": "arrowright",
    "toggle_playback": "space",
}

MODIFIER_ORDER = ("ctrl", "alt", "meta", "shift")

_KEY_ALIASES = {
    " ": "space",
    "spacebar": "space",
    "left": "arrowleft",
    "right": "arrowright",
    "up": "arrowup",
    "down": "arrowdown",
    "del": "delete",
    "esc": "escape",
    "control": "ctrl",
    "cmd": "meta",
    "command": "meta",
    "option": "alt",
}


def normalize_key(combo: str) -> str:
    """
    Canonical form of a key combination.

    "Shift+N", "n+shift" and "SHIFT + n" all become "shift+n".

    Raises:
        ValueError: If the combination has no non-modifier key
    """
    if combo == " ":
        return "space"

    parts = [p.strip().lower() for p in combo.split("+")]
    parts = [_KEY_ALIASES.get(p, p) for p in parts if p]
    modifiers = {p for p in parts if p in MODIFIER_ORDER}
    keys = [p for p in parts if p not in MODIFIER_ORDER]
    if len(keys) != 1:
        raise ValueError(f"Key combination needs exactly one key: {combo!r}")

    ordered = [m for m in MODIFIER_ORDER if m in modifiers]
    return "+".join(ordered + keys)


def combo_from_event(key: str, ctrl: bool = False, alt: bool = False, meta: bool = False, shift: bool = False) -> str:
    """Key combination for a key press and its modifier flags."""
    if key == " ":
        key = "space"
    modifiers = [name for name, held in zip(MODIFIER_ORDER, (ctrl, alt, meta, shift)) if held]
    return normalize_key("+".join(modifiers + [key]))


class HotkeyMap:
    """
    Dispatches key combinations to action handlers.

    Usage:
        hotkeys = HotkeyMap()
        hotkeys.bind("add_scene", session.add_scene)
        hotkeys.handle("Shift+N")
    """

    def __init__(self, shortcuts: Optional[Dict[str, str]] = None):
        self._shortcuts: Dict[str, str] = {}
        self._handlers: Dict[str, Callable[[], object]] = {}
        for action, combo in (shortcuts or DEFAULT_SHORTCUTS).items():
            self.set_shortcut(action, combo)

    @property
    def shortcuts(self) -> Dict[str, str]:
        return dict(self._shortcuts)

    @property
    def actions(self) -> Iterable[str]:
        return list(self._shortcuts)

    def set_shortcut(self, action: str, combo: str) -> None:
        """
        Assign a key combination to an action.

        Raises:
            ValueError: If the combination is already used by another action
        """
        combo = normalize_key(combo)
        for other, existing in self._shortcuts.items():
            if existing == combo and other != action:
                raise ValueError(f"'{combo}' is already bound to '{other}'")
        self._shortcuts[action] = combo

    def bind(self, action: str, handler: Callable[[], object]) -> None:
        if action not in self._shortcuts:
            raise KeyError(f"Unknown hotkey action: {action}")
        self._handlers[action] = handler

    def action_for(self, combo: str) -> Optional[str]:
        try:
            combo = normalize_key(combo)
        except ValueError:
            return None
        for action, bound in self._shortcuts.items():
            if bound == combo:
                return action
        return None

    def handle(self, combo: str) -> bool:
        """
        Run the handler bound to combo.

        Returns:
            True if a handler ran (the key press is consumed), False otherwise
        """
        action = self.action_for(combo)
        if action is None:
            return False

        handler = self._handlers.get(action)
        if handler is None:
            Log.debug(f"HotkeyMap: No handler for '{action}'")
            return False

        Log.debug(f"HotkeyMap: {combo} -> {action}")
        handler()
        return True
