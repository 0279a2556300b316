"""Keyboard input parsing and matching for the interactive prompt.

Understands the legacy xterm sequences emitted by common terminals in raw
mode: cursor and editing keys (optionally with xterm modifier parameters),
C0 control characters and ESC-prefixed Alt combinations. ``matches_key``
checks raw terminal input against a key identifier such as ``"ctrl+w"`` or
``"alt+backspace"``.
"""

from __future__ import annotations

import re

KeyId = str

# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_MODIFIER_ORDER = ("ctrl", "shift", "alt")

_ALIASES: dict[str, str] = {
    "esc": "escape",
    "return": "enter",
    "pageup": "pageUp",
    "pagedown": "pageDown",
}

# Final byte of ``CSI [1;m] X`` and ``SS3 X`` sequences
_CSI_LETTER_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

# Number of ``CSI n [;m] ~`` sequences
_CSI_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    7: "home",
    8: "end",
}

# xterm modifier parameter is 1 + bitmask(shift=1, alt=2, ctrl=4)
_SHIFT_BIT = 1
_ALT_BIT = 2
_CTRL_BIT = 4

_CSI_LETTER_RE = re.compile(r"^\x1b\[(?:1;(\d+))?([ABCDHF])$")
_SS3_RE = re.compile(r"^\x1bO([ABCDHF])$")
_CSI_TILDE_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+))?~$")


def _prefix(bits: int) -> str:
    prefix = ""
    if bits & _CTRL_BIT:
        prefix += "ctrl+"
    if bits & _SHIFT_BIT:
        prefix += "shift+"
    if bits & _ALT_BIT:
        prefix += "alt+"
    return prefix


def _modifier_param(raw: str | None) -> int:
    if not raw:
        return 0
    return max(int(raw) - 1, 0) & (_SHIFT_BIT | _ALT_BIT | _CTRL_BIT)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:
    """Parse raw terminal input and return its key identifier, or ``None``.

    Identifiers are lower-case with modifiers in ``ctrl+shift+alt+`` order,
    e.g. ``"a"``, ``"ctrl+w"``, ``"alt+left"``. Printable characters map to
    themselves; ``None`` means the input is not a single key.
    """
    if not data:
        return None

    match = _CSI_LETTER_RE.match(data)
    if match:
        return _prefix(_modifier_param(match.group(1))) + _CSI_LETTER_KEYS[match.group(2)]

    match = _SS3_RE.match(data)
    if match:
        return _CSI_LETTER_KEYS[match.group(1)]

    match = _CSI_TILDE_RE.match(data)
    if match:
        name = _CSI_TILDE_KEYS.get(int(match.group(1)))
        if name is None:
            return None
        return _prefix(_modifier_param(match.group(2))) + name

    if data == "\x1b[Z":
        return "shift+tab"

    if len(data) == 1:
        return _parse_single(data)

    # Alt + key arrives as ESC followed by the key itself
    if len(data) == 2 and data[0] == "\x1b":
        inner = _parse_single(data[1])
        if inner is None:
            return None
        if inner.startswith("ctrl+"):
            return "ctrl+alt+" + inner[len("ctrl+"):]
        if data[1].isupper():
            return "shift+alt+" + data[1].lower()
        return "alt+" + inner

    return None


def _parse_single(ch: str) -> KeyId | None:
    if ch == "\x1b":
        return "escape"
    if ch in ("\r", "\n"):
        return "enter"
    if ch == "\t":
        return "tab"
    if ch == " ":
        return "space"
    if ch in ("\x7f", "\x08"):
        return "backspace"
    if ch == "\x00":
        return "ctrl+space"
    code = ord(ch)
    if 1 <= code <= 26:
        return "ctrl+" + chr(code + ord("a") - 1)
    if ch == "\x1f":
        return "ctrl+-"
    if ch.isprintable():
        return ch
    return None


def normalize_key_id(key_id: KeyId) -> KeyId | None:
    """Canonicalize a key identifier (modifier order, aliases, case)."""
    if not key_id:
        return None
    parts = key_id.split("+")
    # "ctrl++" style ids name the plus key itself
    if key_id.endswith("++"):
        parts = parts[:-2] + ["+"]
    modifiers = {p.lower() for p in parts[:-1]}
    unknown = modifiers.difference(_MODIFIER_ORDER)
    if unknown:
        return None
    key = parts[-1]
    if len(key) > 1:
        key = _ALIASES.get(key.lower(), key)
    elif modifiers:
        key = key.lower()
    return "".join(f"{m}+" for m in _MODIFIER_ORDER if m in modifiers) + key


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if *data* (raw terminal input) is the key *key_id*."""
    expected = normalize_key_id(key_id)
    if expected is None:
        return False
    return parse_key(data) == expected


def is_printable_input(data: str) -> bool:
    """Return ``True`` if *data* is text to insert rather than a control key."""
    if not data:
        return False
    return not any(
        ord(ch) < 32 or ord(ch) == 0x7F or 0x80 <= ord(ch) <= 0x9F for ch in data
    )
