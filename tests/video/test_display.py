"""Unit tests for the CHIP-8 framebuffer."""

from __future__ import annotations

from pychip8.video import SCREEN_HEIGHT, SCREEN_WIDTH, Display


def test_new_display_is_blank_and_dirty() -> None:
    display = Display()

    assert len(display.snapshot()) == SCREEN_WIDTH * SCREEN_HEIGHT
    assert display.lit_count() == 0
    assert display.dirty


def test_sprite_is_stored_row_major() -> None:
    display = Display()
    display.draw_sprite(2, 1, [0b10100000])

    snapshot = display.snapshot()
    assert snapshot[1 * SCREEN_WIDTH + 2] == 1
    assert snapshot[1 * SCREEN_WIDTH + 3] == 0
    assert snapshot[1 * SCREEN_WIDTH + 4] == 1
    assert display.pixels()[1 * SCREEN_WIDTH + 2] is True


def test_xor_reports_collision_only_when_pixel_turns_off() -> None:
    display = Display()

    assert display.draw_sprite(0, 0, [0b11110000]) is False
    assert display.draw_sprite(4, 0, [0b11110000]) is False
    assert display.draw_sprite(3, 0, [0b10000000]) is True
    assert not display.get_pixel(3, 0)
    assert display.lit_count() == 7


def test_clear_resets_pixels() -> None:
    display = Display()
    display.draw_sprite(10, 10, [0xFF, 0xFF])
    display.dirty = False

    display.clear()

    assert display.lit_count() == 0
    assert display.dirty


def test_sprite_wraps_both_axes() -> None:
    display = Display()
    display.draw_sprite(SCREEN_WIDTH - 1, SCREEN_HEIGHT - 1, [0b11000000, 0b10000000])

    assert display.get_pixel(SCREEN_WIDTH - 1, SCREEN_HEIGHT - 1)
    assert display.get_pixel(0, SCREEN_HEIGHT - 1)
    assert display.get_pixel(SCREEN_WIDTH - 1, 0)
    assert display.lit_count() == 3
