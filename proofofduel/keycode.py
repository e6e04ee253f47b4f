"""Keyboard key codes that count as a press during a duel."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

_KEY_NAMES = (
    "Backquote Backslash BracketLeft BracketRight Comma "
    "Digit0 Digit1 Digit2 Digit3 Digit4 Digit5 Digit6 Digit7 Digit8 Digit9 "
    "Equal IntlBackslash IntlRo IntlYen "
    "KeyA KeyB KeyC KeyD KeyE KeyF KeyG KeyH KeyI KeyJ KeyK KeyL KeyM "
    "KeyN KeyO KeyP KeyQ KeyR KeyS KeyT KeyU KeyV KeyW KeyX KeyY KeyZ "
    "Minus Period Quote Semicolon Slash "
    "AltLeft AltRight Backspace CapsLock ContextMenu ControlLeft ControlRight "
    "Enter SuperLeft SuperRight ShiftLeft ShiftRight Space Tab "
    "Convert KanaMode Lang1 Lang2 Lang3 Lang4 Lang5 NonConvert "
    "Delete End Help Home Insert PageDown PageUp "
    "ArrowDown ArrowLeft ArrowRight ArrowUp NumLock "
    "Numpad0 Numpad1 Numpad2 Numpad3 Numpad4 Numpad5 Numpad6 Numpad7 Numpad8 Numpad9 "
    "NumpadAdd NumpadBackspace NumpadClear NumpadClearEntry NumpadComma "
    "NumpadDecimal NumpadDivide NumpadEnter NumpadEqual NumpadHash "
    "NumpadMemoryAdd NumpadMemoryClear NumpadMemoryRecall NumpadMemoryStore "
    "NumpadMemorySubtract NumpadMultiply NumpadParenLeft NumpadParenRight "
    "NumpadStar NumpadSubtract "
    "Escape Fn FnLock PrintScreen ScrollLock Pause "
    "BrowserBack BrowserFavorites BrowserForward BrowserHome BrowserRefresh "
    "BrowserSearch BrowserStop Eject LaunchApp1 LaunchApp2 LaunchMail "
    "MediaPlayPause MediaSelect MediaStop MediaTrackNext MediaTrackPrevious "
    "Power Sleep AudioVolumeDown AudioVolumeMute AudioVolumeUp WakeUp "
    "Meta Hyper Turbo Abort Resume Suspend Again Copy Cut Find Open Paste "
    "Props Select Undo Hiragana Katakana "
    "F1 F2 F3 F4 F5 F6 F7 F8 F9 F10 F11 F12 F13 F14 F15 F16 F17 F18 "
    "F19 F20 F21 F22 F23 F24 F25 F26 F27 F28 F29 F30 F31 F32 F33 F34 F35"
).split()

KeyCode = Enum(  # type: ignore[misc]
    "KeyCode",
    [(name, name) for name in _KEY_NAMES],
    type=str,
    module=__name__,
    qualname="KeyCode",
)
KeyCode.__doc__ = "Physical key codes, valued by their standard code names."

ALL_KEYS: Tuple["KeyCode", ...] = tuple(KeyCode)

_LABELS = {
    KeyCode.KeyQ: "Q",
    KeyCode.KeyW: "W",
    KeyCode.KeyE: "E",
    KeyCode.KeyR: "R",
}


def key_label(key: "KeyCode") -> str:
    """Label shown on a shooting key; empty for keys outside the shooting pool."""
    return _LABELS.get(key, "")