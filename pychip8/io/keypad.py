"""CHIP-8 hexadecimal keypad latch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from pychip8.utils import debug_enabled, debug_log

NUM_KEYS = 16

# Host key name -> CHIP-8 key. The COSMAC VIP pad
#   1 2 3 C
#   4 5 6 D
#   7 8 9 E
#   A 0 B F
# is laid over the left-hand block of a QWERTY keyboard.
KEY_MAP_TEMPLATE: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


# Alternative names as reported by ``pygame.key.name``. The arrow keys drive
# 5/7/8/9, the up/left/down/right keys most CHIP-8 games read.
ALIAS_TABLE: Mapping[str, str] = {
    "up": "w",
    "left": "a",
    "down": "s",
    "right": "d",
}


def lookup_key(key_name: str) -> int | None:
    name = key_name.lower()
    name = ALIAS_TABLE.get(name, name)
    return KEY_MAP_TEMPLATE.get(name)


@dataclass
class Keypad:
    """Sixteen press/release flags written by the host, read by the CPU."""

    _keys: list[bool] = field(default_factory=lambda: [False] * NUM_KEYS)
    _active: Dict[int, int] = field(default_factory=dict)

    def press(self, key: int) -> None:
        self._check_key(key)
        self._keys[key] = True
        if debug_enabled("input"):
            debug_log("input", "key_press key=%X", key)

    def release(self, key: int) -> None:
        self._check_key(key)
        self._keys[key] = False
        self._active.pop(key, None)
        if debug_enabled("input"):
            debug_log("input", "key_release key=%X", key)

    def press_named(self, key_name: str) -> None:
        """Press the key mapped to a host key name; several names may share one key."""

        key = lookup_key(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return
        self._active[key] = self._active.get(key, 0) + 1
        self.press(key)

    def release_named(self, key_name: str) -> None:
        key = lookup_key(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key_name)
            return
        count = self._active.get(key, 0)
        if count > 1:
            self._active[key] = count - 1
            return
        self.release(key)

    def is_pressed(self, key: int) -> bool:
        return self._keys[key & 0x0F]

    def first_pressed(self) -> int | None:
        """Return the lowest pressed key, or ``None`` when the pad is idle."""

        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    def reset(self) -> None:
        self._keys[:] = [False] * NUM_KEYS
        self._active.clear()

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    def _check_key(self, key: int) -> None:
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"key out of range: {key}")
