"""Input helpers for the CHIP-8 interpreter."""

from .keypad import ALIAS_TABLE, KEY_MAP_TEMPLATE, NUM_KEYS, Keypad, lookup_key

__all__ = [
    "Keypad",
    "KEY_MAP_TEMPLATE",
    "ALIAS_TABLE",
    "NUM_KEYS",
    "lookup_key",
]
