import pytest

from palette_studio.shades import (
    DEFAULT_SHADES,
    auto_ranges,
    parse_custom_ranges,
    shade_schedule,
)


def test_default_auto_schedule():
    shades = shade_schedule(False, "", 50, 950)
    assert shades == list(range(50, 951, 50))
    assert 500 in shades


def test_custom_drops_invalid_and_adds_base():
    assert shade_schedule(True, "50,9999,abc,200", 50, 950) == [50, 200, 500]


def test_custom_dedupes_and_sorts():
    assert shade_schedule(True, "900, 100,100", 50, 950) == [100, 500, 900]


def test_custom_parses_leading_integer():
    assert parse_custom_ranges("12px, 40, -5, 2100, 2101") == [12, 40, 2100]


def test_blank_custom_uses_auto():
    assert shade_schedule(True, "   ", 50, 950) == shade_schedule(False, "", 50, 950)


def test_max_range_appended():
    assert auto_ranges(60, 975)[-2:] == [960, 975]
    shades = shade_schedule(False, "", 60, 975)
    assert 500 in shades and shades[-1] == 975


def test_base_not_added_outside_bounds():
    assert shade_schedule(False, "", 600, 1000) == [600, 650, 700, 750, 800, 850, 900, 950, 1000]


def test_empty_schedule_falls_back():
    assert shade_schedule(True, "abc, x", 600, 1000) == DEFAULT_SHADES


@pytest.mark.parametrize(
    "args",
    [
        (False, "", 50, 950),
        (False, "", 0, 2100),
        (True, "700,300,500,300,1200", 50, 950),
        (True, "5, 5, 5", 0, 100),
    ],
)
def test_sorted_and_unique(args):
    shades = shade_schedule(*args)
    assert shades == sorted(set(shades))


def test_unusable_custom_list_falls_back_within_default_bounds():
    assert shade_schedule(True, "abc, 9999", 50, 950) == DEFAULT_SHADES


def test_only_ascii_digits_parse():
    assert parse_custom_ranges("٥٠٠, 40") == [40]
