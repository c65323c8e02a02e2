import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from posdevices.core.hardware_types import (
    CONNECTION_TYPE_CHOICES,
    DEVICE_TYPE_CHOICES,
    UnknownDeviceType,
    ordered_connection_types,
)
from posdevices.services.defaults import default_connection_config, default_device_config
from posdevices.services.devices import make_device
from posdevices.services.validation import (
    check_connection_config,
    validate_connection_config,
    validate_device_config,
)


def _block(model, tag):
    return model.model_dump(exclude={tag}, exclude_none=True)


def test_connection_defaults():
    assert _block(default_connection_config("network"), "connection_type") == {"ip_address": "", "port": 9100}
    assert _block(default_connection_config("bluetooth"), "connection_type") == {
        "mac_address": "",
        "device_name": "",
        "service_uuid": "00001101-0000-1000-8000-00805F9B34FB",
    }
    assert _block(default_connection_config("usb"), "connection_type") == {
        "vendor_id": 0,
        "product_id": 0,
        "usb_path": "",
    }


def test_unknown_connection_type_has_no_default():
    with pytest.raises(ValueError):
        default_connection_config("serial")


@pytest.mark.parametrize(
    "device_type, mode, expected",
    [
        (
            "printer",
            "thermal",
            {"mode": "thermal", "paper": "80mm", "auto": True, "copies": 1, "cut": True, "drawer": False, "encoding": "utf8"},
        ),
        ("printer", "label", {"mode": "label", "paper": "4x6", "zpl": True}),
        ("printer", "document", {"mode": "document", "paper": "a4", "copies": 1}),
        ("scanner", None, {"prefix": "", "suffix": "\r\n", "beep_on_scan": True}),
        ("payment_terminal", None, {"provider": "stripe", "sandbox_mode": False}),
        ("scale", None, {"unit": "kg", "decimal_places": 2}),
        ("cash_drawer", None, {"open_command": "ESC p 0 50 250"}),
        ("display", None, {"line_count": 2, "chars_per_line": 20}),
    ],
)
def test_device_defaults(device_type, mode, expected):
    assert _block(default_device_config(device_type, mode), "device_type") == expected


def test_printer_defaults_to_thermal_mode():
    assert default_device_config("printer") == default_device_config("printer", "thermal")


def test_mode_is_ignored_for_non_printers():
    assert default_device_config("scale", "label") == default_device_config("scale")


def test_unknown_device_type_has_no_default():
    with pytest.raises(UnknownDeviceType):
        default_device_config("kiosk")


@pytest.mark.parametrize("device_type", DEVICE_TYPE_CHOICES)
def test_default_device_blocks_always_validate(device_type):
    connection_type = ordered_connection_types(device_type)[0]
    device = make_device("D-default", device_type, connection_type)
    assert validate_device_config(device)


@pytest.mark.parametrize("mode", ["thermal", "label", "document"])
def test_default_printer_blocks_validate_in_every_mode(mode):
    device = make_device("P-default", "printer", "usb", mode=mode)
    assert validate_device_config(device)


@pytest.mark.parametrize("connection_type", CONNECTION_TYPE_CHOICES)
def test_default_connection_blocks_are_not_ready_for_submission(connection_type):
    device = make_device("D-conn", "printer", connection_type)
    report = check_connection_config(device)
    assert not validate_connection_config(device)
    assert report.errors
    assert not report.missing_blocks
