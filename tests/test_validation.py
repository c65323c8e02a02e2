import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from posdevices.core.hardware_types import UnknownDeviceType
from posdevices.schemas.hardware import HardwareDeviceRecord
from posdevices.services.devices import make_device, update_device
from posdevices.services.validation import (
    ValidationReport,
    check_connection_config,
    check_device,
    check_device_config,
    is_device_valid,
    validate_connection_config,
    validate_device_config,
)


def network_printer(**network):
    return {
        "id": "P1",
        "type": "printer",
        "connection_type": "network",
        "network_config": {"ip_address": "192.168.1.100", "port": 9100, **network},
        "printer_config": {"mode": "thermal", "paper": "80mm"},
    }


def test_network_record_passes():
    assert validate_connection_config(network_printer())
    assert is_device_valid(network_printer())


@pytest.mark.parametrize("port", [1, 65535])
def test_port_bounds_pass(port):
    assert validate_connection_config(network_printer(port=port))


@pytest.mark.parametrize("port", [0, 65536, -1])
def test_port_bounds_fail(port):
    report = check_connection_config(network_printer(port=port))
    assert not report.ok
    assert "network_config.port" in report.errors


def test_missing_port_is_reported():
    report = check_connection_config(network_printer(port=None))
    assert report.errors["network_config.port"] == "port is required"


@pytest.mark.parametrize("ip", ["", "192.168.1", "256.1.1.1", "printer.local", "192.168.1.100 ", "192.168.1.100\n"])
def test_bad_ip_addresses(ip):
    report = check_connection_config(network_printer(ip_address=ip))
    assert "network_config.ip_address" in report.errors


def test_trailing_newline_in_ip_fails_whole_device():
    assert not is_device_valid(network_printer(ip_address="192.168.1.100\n"))


def bluetooth_scanner(mac, **extra):
    return {
        "id": "S1",
        "type": "scanner",
        "connection_type": "bluetooth",
        "bluetooth_config": {"mac_address": mac, **extra},
        "scanner_config": {},
    }


@pytest.mark.parametrize("mac", ["00:11:22:33:44:55", "AA-BB-CC-DD-EE-FF", "aa:bb:cc:dd:ee:0f"])
def test_bluetooth_mac_passes(mac):
    assert validate_connection_config(bluetooth_scanner(mac))


@pytest.mark.parametrize("mac", ["0011:22:33:44:55", "00:11:22:33:44", "00:11:22:33:44:GG", "", "00:11:22:33:44:55\n"])
def test_bluetooth_mac_fails(mac):
    report = check_connection_config(bluetooth_scanner(mac))
    assert "bluetooth_config.mac_address" in report.errors


def test_bluetooth_service_uuid_is_checked_when_present():
    assert validate_connection_config(bluetooth_scanner("00:11:22:33:44:55", service_uuid=""))
    report = check_connection_config(bluetooth_scanner("00:11:22:33:44:55", service_uuid="spp"))
    assert "bluetooth_config.service_uuid" in report.errors
    report = check_connection_config(
        bluetooth_scanner("00:11:22:33:44:55", service_uuid="00001101-0000-1000-8000-00805F9B34FB\n")
    )
    assert "bluetooth_config.service_uuid" in report.errors


def usb_drawer(vendor_id, product_id):
    return {
        "id": "C1",
        "type": "cash_drawer",
        "connection_type": "usb",
        "usb_config": {"vendor_id": vendor_id, "product_id": product_id},
        "drawer_config": {},
    }


def test_usb_ids_must_be_positive_16_bit():
    assert validate_connection_config(usb_drawer(0x04B8, 0x0202))
    report = check_connection_config(usb_drawer(0, 0x0202))
    assert report.errors == {"usb_config.vendor_id": "vendor ID is required"}
    report = check_connection_config(usb_drawer(0x04B8, 0x10000))
    assert list(report.errors) == ["usb_config.product_id"]


def test_missing_connection_block_is_distinct_from_invalid_field():
    record = network_printer()
    del record["network_config"]
    report = check_connection_config(record)
    assert report.missing_blocks == ["network_config"]
    assert report.errors == {}


def test_extra_connection_block_is_reported():
    record = network_printer()
    record["usb_config"] = {"vendor_id": 1, "product_id": 2}
    report = check_connection_config(record)
    assert report.errors == {"usb_config": "unexpected block for connection type 'network'"}


def test_unknown_connection_type_is_reported_not_raised():
    record = network_printer()
    record["connection_type"] = "serial"
    report = check_connection_config(record)
    assert "connection_type" in report.errors


def test_thermal_printer_rejects_document_paper():
    device = make_device("D2", "printer", "network")
    device = update_device(device, device_config={"mode": "thermal", "paper": "a4"})
    report = check_device_config(device)
    assert not validate_device_config(device)
    assert list(report.errors) == ["printer_config.paper"]


def test_printer_mode_is_required_and_known():
    record = network_printer()
    record["printer_config"] = {"paper": "80mm"}
    assert check_device_config(record).errors == {"printer_config.mode": "printer mode is required"}
    record["printer_config"] = {"mode": "inkjet"}
    assert "printer_config.mode" in check_device_config(record).errors


def test_printer_without_paper_is_fine():
    record = network_printer()
    record["printer_config"] = {"mode": "label"}
    assert validate_device_config(record)


def test_printer_optional_fields_are_range_checked():
    record = network_printer()
    record["printer_config"] = {"mode": "thermal", "copies": 0, "encoding": "latin1", "width": -5}
    errors = check_device_config(record).errors
    assert set(errors) == {"printer_config.copies", "printer_config.encoding", "printer_config.width"}


def test_scale_decimal_places():
    device = make_device("S5", "scale", "usb")
    assert validate_device_config(device)
    changed = update_device(device, device_config={"decimal_places": 5})
    assert not validate_device_config(changed)
    assert validate_device_config(update_device(device, device_config={"decimal_places": 0}))
    assert validate_device_config(update_device(device, device_config={"decimal_places": 4}))


def test_scale_unit_membership():
    device = make_device("S6", "scale", "network")
    assert not validate_device_config(update_device(device, device_config={"unit": "oz"}))
    assert validate_device_config(update_device(device, device_config={"unit": "g"}))


def test_payment_provider_required():
    device = make_device("T1", "payment_terminal", "network")
    report = check_device_config(update_device(device, device_config={"provider": ""}))
    assert report.errors == {"payment_config.provider": "payment provider is required"}
    assert not validate_device_config(update_device(device, device_config={"provider": "square"}))


@pytest.mark.parametrize(
    "changes, field",
    [
        ({"line_count": 0}, "display_config.line_count"),
        ({"line_count": 21}, "display_config.line_count"),
        ({"chars_per_line": 9}, "display_config.chars_per_line"),
        ({"chars_per_line": 81}, "display_config.chars_per_line"),
    ],
)
def test_display_ranges(changes, field):
    device = update_device(make_device("DSP", "display", "usb"), device_config=changes)
    assert field in check_device_config(device).errors


def test_display_block_with_no_fields_is_valid():
    record = {
        "id": "DSP2",
        "type": "display",
        "connection_type": "usb",
        "usb_config": {"vendor_id": 1, "product_id": 1},
        "display_config": {},
    }
    assert is_device_valid(record)


def test_missing_device_block():
    record = network_printer()
    del record["printer_config"]
    report = check_device_config(record)
    assert report.missing_blocks == ["printer_config"]


def test_extra_device_block_is_reported():
    record = network_printer()
    record["scale_config"] = {"unit": "kg"}
    assert check_device_config(record).errors == {"scale_config": "unexpected block for device type 'printer'"}


def test_incompatible_pair_fails_full_check():
    record = bluetooth_scanner("00:11:22:33:44:55")
    record["connection_type"] = "network"
    record["network_config"] = {"ip_address": "10.0.0.2", "port": 9100}
    del record["bluetooth_config"]
    report = check_device(record)
    assert not report.ok
    assert list(report.errors) == ["connection_type"]


def test_unknown_device_type_raises():
    record = network_printer()
    record["type"] = "kiosk"
    with pytest.raises(UnknownDeviceType):
        is_device_valid(record)
    with pytest.raises(UnknownDeviceType):
        check_device_config(record)


def test_is_device_valid_is_idempotent_and_pure():
    record = HardwareDeviceRecord.model_validate(network_printer(port=0))
    before = record.model_dump()
    first = is_device_valid(record)
    second = is_device_valid(record)
    assert first is second is False
    assert record.model_dump() == before

    device = make_device("P9", "printer", "network")
    snapshot = device.model_dump()
    assert is_device_valid(device) == is_device_valid(device)
    assert device.model_dump() == snapshot


def test_report_merge_keeps_first_reason():
    report = ValidationReport(errors={"a": "first"})
    report.merge(ValidationReport(errors={"a": "second", "b": "x"}, missing_blocks=["usb_config"]))
    assert report.errors == {"a": "first", "b": "x"}
    assert report.missing_blocks == ["usb_config"]
    assert not report
    assert report.as_dict()["valid"] is False
