import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from posdevices.core.hexcodes import format_usb_id, parse_usb_id


def test_format_usb_id_pads_and_uppercases():
    assert format_usb_id(0x04B8) == "0x04B8"
    assert format_usb_id(0x202) == "0x0202"
    assert format_usb_id(0xFFFF) == "0xFFFF"


def test_format_usb_id_blank_for_unset():
    assert format_usb_id(0) == ""
    assert format_usb_id(None) == ""


@pytest.mark.parametrize("raw", ["0x04B8", "0X04b8", "04b8", "4B8", "  0x04B8 "])
def test_parse_usb_id_accepts_hex_forms(raw):
    assert parse_usb_id(raw) == 1208


def test_parse_usb_id_blank_and_int():
    assert parse_usb_id("") == 0
    assert parse_usb_id("0x") == 0
    assert parse_usb_id(None) == 0
    assert parse_usb_id(1208) == 1208
    assert parse_usb_id(0xFFFF) == 0xFFFF


@pytest.mark.parametrize("raw", [True, -1, 0x10000])
def test_parse_usb_id_rejects_out_of_range_ints(raw):
    with pytest.raises(ValueError):
        parse_usb_id(raw)


@pytest.mark.parametrize("raw", ["0xZZ", "12345", "0x1_000", "epson"])
def test_parse_usb_id_rejects_garbage(raw):
    with pytest.raises(ValueError):
        parse_usb_id(raw)
