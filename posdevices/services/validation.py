"""Structural checks for device records.

Every check returns a :class:`ValidationReport` instead of raising, so an
edit form can highlight the exact field that is wrong. Field paths use the
wire block names (``network_config.port``) because that is what the form and
the REST payload both speak. The only hard failure is an unknown device type.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Union

from pydantic import BaseModel

from ..core.hardware_types import (
    DEVICE_TYPE_CHOICES,
    ENCODING_CHOICES,
    PAYMENT_PROVIDER_CHOICES,
    PRINTER_MODE_CHOICES,
    WEIGHT_UNIT_CHOICES,
    UnknownDeviceType,
    allowed_connection_types,
    paper_sizes_for_printer_mode,
)
from ..core.hexcodes import MAX_USB_ID
from ..schemas.connection import CONNECTION_BLOCK_FIELDS
from ..schemas.device_config import DEVICE_BLOCK_FIELDS
from ..schemas.hardware import HardwareDevice, HardwareDeviceRecord

logger = logging.getLogger(__name__)

MIN_PORT = 1
MAX_PORT = 65535
MAX_DECIMAL_PLACES = 4
LINE_COUNT_RANGE = (1, 20)
CHARS_PER_LINE_RANGE = (10, 80)

_IPV4_RE = re.compile(
    r"(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
)
_MAC_RE = re.compile(r"(?:[0-9A-Fa-f]{2}[:-]){5}[0-9A-Fa-f]{2}")
_UUID_RE = re.compile(r"[0-9A-Fa-f]{8}-(?:[0-9A-Fa-f]{4}-){3}[0-9A-Fa-f]{12}")

DeviceLike = Union[HardwareDevice, HardwareDeviceRecord, Mapping[str, Any]]


@dataclass
class ValidationReport:
    errors: dict[str, str] = field(default_factory=dict)
    missing_blocks: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors and not self.missing_blocks

    def __bool__(self) -> bool:
        return self.ok

    def add_error(self, path: str, reason: str) -> None:
        # Keep the first reason reported for a field.
        self.errors.setdefault(path, reason)

    def add_missing(self, block: str) -> None:
        if block not in self.missing_blocks:
            self.missing_blocks.append(block)

    def merge(self, other: "ValidationReport") -> "ValidationReport":
        for path, reason in other.errors.items():
            self.add_error(path, reason)
        for block in other.missing_blocks:
            self.add_missing(block)
        return self

    def as_dict(self) -> dict[str, Any]:
        return {"valid": self.ok, "errors": dict(self.errors), "missing_blocks": list(self.missing_blocks)}


def as_record(device: DeviceLike) -> HardwareDeviceRecord:
    if isinstance(device, HardwareDeviceRecord):
        return device
    if isinstance(device, HardwareDevice):
        return device.to_record()
    return HardwareDeviceRecord.model_validate(device)


def _check_range(report: ValidationReport, path: str, value: int | float | None, low: int, high: int) -> None:
    if value is not None and not low <= value <= high:
        report.add_error(path, f"must be between {low} and {high}")


# ---------------------------------------------------------------------------
# Connection blocks
# ---------------------------------------------------------------------------


def _check_network(block: Any, prefix: str, report: ValidationReport) -> None:
    ip_address = block.ip_address
    if not ip_address:
        report.add_error(f"{prefix}.ip_address", "IP address is required")
    elif not _IPV4_RE.fullmatch(ip_address):
        report.add_error(f"{prefix}.ip_address", "must be an IPv4 address like 192.168.1.100")

    if block.port is None:
        report.add_error(f"{prefix}.port", "port is required")
    else:
        _check_range(report, f"{prefix}.port", block.port, MIN_PORT, MAX_PORT)


def _check_bluetooth(block: Any, prefix: str, report: ValidationReport) -> None:
    mac_address = block.mac_address
    if not mac_address:
        report.add_error(f"{prefix}.mac_address", "MAC address is required")
    elif not _MAC_RE.fullmatch(mac_address):
        report.add_error(f"{prefix}.mac_address", "must be six hex byte pairs like 00:11:22:33:44:55")

    if block.service_uuid and not _UUID_RE.fullmatch(block.service_uuid):
        report.add_error(f"{prefix}.service_uuid", "must be a UUID like 00001101-0000-1000-8000-00805F9B34FB")


def _check_usb(block: Any, prefix: str, report: ValidationReport) -> None:
    for name, label in (("vendor_id", "vendor ID"), ("product_id", "product ID")):
        value = getattr(block, name)
        path = f"{prefix}.{name}"
        if value is None or value <= 0:
            report.add_error(path, f"{label} is required")
        elif value > MAX_USB_ID:
            report.add_error(path, f"{label} must fit in 16 bits (max 0xFFFF)")


_CONNECTION_CHECKS: dict[str, Callable[[Any, str, ValidationReport], None]] = {
    "network": _check_network,
    "bluetooth": _check_bluetooth,
    "usb": _check_usb,
}


def check_connection_config(device: DeviceLike) -> ValidationReport:
    """Check that the block selected by ``connection_type`` is present and well-formed."""

    record = as_record(device)
    report = ValidationReport()
    connection_type = record.connection_type
    block_field = CONNECTION_BLOCK_FIELDS.get(connection_type)
    if block_field is None:
        report.add_error("connection_type", f"unknown connection type {connection_type!r}")
        return report

    for other in record.populated_connection_blocks():
        if other != block_field:
            report.add_error(other, f"unexpected block for connection type {connection_type!r}")

    block = record.block(block_field)
    if block is None:
        report.add_missing(block_field)
        return report

    _CONNECTION_CHECKS[connection_type](block, block_field, report)
    return report


# ---------------------------------------------------------------------------
# Device blocks
# ---------------------------------------------------------------------------


def _check_printer(block: Any, prefix: str, report: ValidationReport) -> None:
    mode = block.mode
    if not mode:
        report.add_error(f"{prefix}.mode", "printer mode is required")
    elif mode not in PRINTER_MODE_CHOICES:
        report.add_error(f"{prefix}.mode", f"unknown printer mode {mode!r}")
    elif block.paper is not None and block.paper not in paper_sizes_for_printer_mode(mode):
        allowed = ", ".join(sorted(paper_sizes_for_printer_mode(mode)))
        report.add_error(f"{prefix}.paper", f"paper {block.paper!r} is not available in {mode} mode ({allowed})")

    if block.copies is not None and block.copies < 1:
        report.add_error(f"{prefix}.copies", "must be at least 1")
    if block.encoding is not None and block.encoding not in ENCODING_CHOICES:
        report.add_error(f"{prefix}.encoding", f"unsupported encoding {block.encoding!r}")
    for name in ("width", "height"):
        value = getattr(block, name)
        if value is not None and value <= 0:
            report.add_error(f"{prefix}.{name}", "must be greater than 0")


def _check_payment(block: Any, prefix: str, report: ValidationReport) -> None:
    if not block.provider:
        report.add_error(f"{prefix}.provider", "payment provider is required")
    elif block.provider not in PAYMENT_PROVIDER_CHOICES:
        report.add_error(f"{prefix}.provider", f"unsupported payment provider {block.provider!r}")


def _check_scale(block: Any, prefix: str, report: ValidationReport) -> None:
    if not block.unit:
        report.add_error(f"{prefix}.unit", "weight unit is required")
    elif block.unit not in WEIGHT_UNIT_CHOICES:
        report.add_error(f"{prefix}.unit", f"unsupported weight unit {block.unit!r}")
    _check_range(report, f"{prefix}.decimal_places", block.decimal_places, 0, MAX_DECIMAL_PLACES)


def _check_display(block: Any, prefix: str, report: ValidationReport) -> None:
    _check_range(report, f"{prefix}.line_count", block.line_count, *LINE_COUNT_RANGE)
    _check_range(report, f"{prefix}.chars_per_line", block.chars_per_line, *CHARS_PER_LINE_RANGE)


def _presence_only(block: Any, prefix: str, report: ValidationReport) -> None:
    pass


_DEVICE_CHECKS: dict[str, Callable[[Any, str, ValidationReport], None]] = {
    "printer": _check_printer,
    "scanner": _presence_only,
    "payment_terminal": _check_payment,
    "scale": _check_scale,
    "cash_drawer": _presence_only,
    "display": _check_display,
}


def _require_known_type(record: HardwareDeviceRecord) -> str:
    if record.type not in DEVICE_TYPE_CHOICES:
        raise UnknownDeviceType(record.type)
    return record.type


def check_device_config(device: DeviceLike) -> ValidationReport:
    """Check that the block selected by ``type`` is present and well-formed."""

    record = as_record(device)
    device_type = _require_known_type(record)
    report = ValidationReport()
    block_field = DEVICE_BLOCK_FIELDS[device_type]

    for other in record.populated_device_blocks():
        if other != block_field:
            report.add_error(other, f"unexpected block for device type {device_type!r}")

    block: BaseModel | None = record.block(block_field)
    if block is None:
        report.add_missing(block_field)
        return report

    _DEVICE_CHECKS[device_type](block, block_field, report)
    return report


def check_device(device: DeviceLike) -> ValidationReport:
    """Full check: compatibility, connection block and device block."""

    record = as_record(device)
    device_type = _require_known_type(record)
    report = ValidationReport()
    if record.connection_type not in allowed_connection_types(device_type):
        report.add_error(
            "connection_type",
            f"connection type {record.connection_type!r} is not supported for {device_type!r}",
        )
    report.merge(check_connection_config(record))
    report.merge(check_device_config(record))
    if not report.ok:
        logger.debug(
            "device.invalid",
            extra={
                "extra_data": {
                    "device_id": record.id,
                    "fields": sorted(report.errors),
                    "missing_blocks": report.missing_blocks,
                }
            },
        )
    return report


def validate_connection_config(device: DeviceLike) -> bool:
    return check_connection_config(device).ok


def validate_device_config(device: DeviceLike) -> bool:
    return check_device_config(device).ok


def is_device_valid(device: DeviceLike) -> bool:
    """Single gate to run before accepting a device record. Never mutates ``device``."""

    return check_device(device).ok


__all__ = [
    "ValidationReport",
    "as_record",
    "check_connection_config",
    "check_device",
    "check_device_config",
    "is_device_valid",
    "validate_connection_config",
    "validate_device_config",
]
