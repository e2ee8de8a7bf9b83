from typing import Optional

from PySide6.QtCore import Qt

# Qt key codes to the key names the keyboard machine speaks.
KEY_NAMES = {
    int(Qt.Key_Right): "ArrowRight",
    int(Qt.Key_Left): "ArrowLeft",
    int(Qt.Key_Up): "ArrowUp",
    int(Qt.Key_Down): "ArrowDown",
    int(Qt.Key_PageUp): "PageUp",
    int(Qt.Key_PageDown): "PageDown",
    int(Qt.Key_Control): "Control",
    int(Qt.Key_Equal): "=",
    int(Qt.Key_Plus): "+",
    int(Qt.Key_Minus): "-",
}

DIGIT_KEYS = {int(getattr(Qt, f"Key_{d}")): str(d) for d in range(10)}


class KeyHandle:
    """Cancelable handle passed along with a key press."""

    def __init__(self):
        self.default_prevented = False

    def prevent_default(self) -> None:
        self.default_prevented = True


def qt_key_name(key) -> Optional[str]:
    """
    Name for a Qt key code, or None for keys LyricDeck does not handle.

    Digits are matched by key code, not text: with Ctrl held the event text
    is a control character.
    """
    code = int(key)
    if code in DIGIT_KEYS:
        return DIGIT_KEYS[code]
    return KEY_NAMES.get(code)


def ctrl_held(modifiers) -> bool:
    return bool(modifiers & Qt.ControlModifier)
