"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.
    CTRL_SPECIAL = "ctrl_special"  # Ctrl + arrow keys


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace', 'f2')
    raw: str  # The raw key token
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    is_sequence: bool = False


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert',
} | {f'f{n}' for n in range(1, 13)}

# curtsies spellings that differ from the names commands are bound to
KEY_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'del': 'delete',
    'esc': 'escape',
    'spacebar': 'space',
    'spc': 'space',
}

# Unmodified named keys that insert text
TEXT_KEYS = {'space': ' ', 'tab': '\t'}

# Control bytes with a meaning of their own; other 0x01-0x1a bytes are Ctrl-<letter>
CONTROL_BYTES = {
    '\x08': (KeyType.SPECIAL, 'backspace'),
    '\x7f': (KeyType.SPECIAL, 'backspace'),
    '\t': (KeyType.REGULAR, '\t'),
    '\n': (KeyType.SPECIAL, 'enter'),
    '\r': (KeyType.SPECIAL, 'enter'),
    '\x1b': (KeyType.SPECIAL, 'escape'),
}


class KeyboardHandler:
    """Maps curtsies key names to KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a key token (e.g. '<LEFT>', '<Ctrl-RIGHT>', 'a') into a KeyEvent."""
        token = str(key)
        if len(token) > 2 and token[0] == '<' and token[-1] == '>':
            return self._parse_named(token)
        if token in CONTROL_BYTES:
            key_type, value = CONTROL_BYTES[token]
            raw = '\x1b' if value == 'escape' else token
            return KeyEvent(key_type=key_type, value=value, raw=raw)
        if len(token) == 1 and 1 <= ord(token) <= 26:
            letter = chr(ord('a') + ord(token) - 1)
            return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=token, is_ctrl=True)
        return KeyEvent(key_type=KeyType.REGULAR, value=token, raw=token)

    def _parse_named(self, token: str) -> KeyEvent:
        # '<Esc+LEFT>' and '<Esc-LEFT>' are the same key
        *modifiers, base = token[1:-1].lower().replace('+', '-').split('-')
        base = KEY_ALIASES.get(base, base)
        mods = set(modifiers)
        alt = bool(mods & {'alt', 'meta', 'esc'})
        ctrl = 'ctrl' in mods
        shift = 'shift' in mods

        if not mods:
            if base in TEXT_KEYS:
                return KeyEvent(key_type=KeyType.REGULAR, value=TEXT_KEYS[base], raw=TEXT_KEYS[base])
            if base == 'escape':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

        letter = len(base) == 1
        if ctrl and letter:
            # Ctrl-J/Ctrl-M are what terminals send for Enter
            if base in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=token, is_sequence=True)
            return KeyEvent(key_type=KeyType.CTRL, value=base, raw=token, is_ctrl=True)

        named = base in SPECIAL_KEYS
        if alt and (named or letter):
            key_type = KeyType.ALT
        elif ctrl and named:
            key_type = KeyType.CTRL_SPECIAL
        elif shift and named:
            key_type = KeyType.SHIFT_SPECIAL
        else:
            # Unknown tokens stay specials so no text is inserted for them
            key_type = KeyType.SPECIAL
        return KeyEvent(key_type=key_type, value=base, raw=token, is_alt=alt and key_type == KeyType.ALT,
                        is_ctrl=ctrl and key_type == KeyType.CTRL_SPECIAL,
                        is_shift=shift and key_type == KeyType.SHIFT_SPECIAL, is_sequence=True)
