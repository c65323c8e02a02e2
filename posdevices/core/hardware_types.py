"""Shared hardware taxonomy constants and lookups.

Device types, connection types, printer modes and the tables that tie them
together. Everything here is static reference data; the only lookup that
refuses an unknown key is :func:`allowed_connection_types`.
"""

from __future__ import annotations

from typing import Literal

DEVICE_TYPE_PRINTER = "printer"
DEVICE_TYPE_SCANNER = "scanner"
DEVICE_TYPE_CASH_DRAWER = "cash_drawer"
DEVICE_TYPE_SCALE = "scale"
DEVICE_TYPE_PAYMENT_TERMINAL = "payment_terminal"
DEVICE_TYPE_DISPLAY = "display"

DEVICE_TYPE_CHOICES = (
    DEVICE_TYPE_PRINTER,
    DEVICE_TYPE_SCANNER,
    DEVICE_TYPE_CASH_DRAWER,
    DEVICE_TYPE_SCALE,
    DEVICE_TYPE_PAYMENT_TERMINAL,
    DEVICE_TYPE_DISPLAY,
)

CONNECTION_TYPE_USB = "usb"
CONNECTION_TYPE_NETWORK = "network"
CONNECTION_TYPE_BLUETOOTH = "bluetooth"

CONNECTION_TYPE_CHOICES = (
    CONNECTION_TYPE_USB,
    CONNECTION_TYPE_NETWORK,
    CONNECTION_TYPE_BLUETOOTH,
)

PRINTER_MODE_THERMAL = "thermal"
PRINTER_MODE_LABEL = "label"
PRINTER_MODE_DOCUMENT = "document"

PRINTER_MODE_CHOICES = (
    PRINTER_MODE_THERMAL,
    PRINTER_MODE_LABEL,
    PRINTER_MODE_DOCUMENT,
)

PAPER_SIZE_CHOICES = ("80mm", "58mm", "a4", "a5", "letter", "4x6")
ENCODING_CHOICES = ("utf8", "gbk")
WEIGHT_UNIT_CHOICES = ("kg", "lb", "g")
PAYMENT_PROVIDER_CHOICES = ("stripe", "pax", "verifone", "ingenico", "clover")

DeviceType = Literal["printer", "scanner", "cash_drawer", "scale", "payment_terminal", "display"]
ConnectionType = Literal["usb", "network", "bluetooth"]

# Which transports each device type may use.
_ALLOWED_CONNECTIONS: dict[str, frozenset[str]] = {
    DEVICE_TYPE_PRINTER: frozenset({CONNECTION_TYPE_USB, CONNECTION_TYPE_NETWORK, CONNECTION_TYPE_BLUETOOTH}),
    DEVICE_TYPE_SCANNER: frozenset({CONNECTION_TYPE_USB, CONNECTION_TYPE_BLUETOOTH}),
    DEVICE_TYPE_CASH_DRAWER: frozenset({CONNECTION_TYPE_USB, CONNECTION_TYPE_NETWORK}),
    DEVICE_TYPE_SCALE: frozenset({CONNECTION_TYPE_USB, CONNECTION_TYPE_NETWORK}),
    DEVICE_TYPE_PAYMENT_TERMINAL: frozenset(
        {CONNECTION_TYPE_USB, CONNECTION_TYPE_NETWORK, CONNECTION_TYPE_BLUETOOTH}
    ),
    DEVICE_TYPE_DISPLAY: frozenset({CONNECTION_TYPE_USB, CONNECTION_TYPE_NETWORK}),
}

_PAPER_SIZES: dict[str, frozenset[str]] = {
    PRINTER_MODE_THERMAL: frozenset({"80mm", "58mm"}),
    PRINTER_MODE_DOCUMENT: frozenset({"a4", "a5", "letter"}),
    PRINTER_MODE_LABEL: frozenset({"4x6"}),
}


class UnknownDeviceType(ValueError):
    """Raised when a device type is not part of the taxonomy."""

    def __init__(self, device_type: object) -> None:
        super().__init__(f"unknown device type: {device_type!r}")
        self.device_type = device_type


class UnsupportedCombination(ValueError):
    """Raised when a device type cannot use the requested connection type."""

    def __init__(self, device_type: str, connection_type: object) -> None:
        allowed = ", ".join(ordered_connection_types(device_type))
        super().__init__(
            f"connection type {connection_type!r} is not supported for {device_type!r} (allowed: {allowed})"
        )
        self.device_type = device_type
        self.connection_type = connection_type


def normalize_device_type(value: str | None) -> str:
    """Return a lowercase, trimmed device type or raise ``UnknownDeviceType``."""

    cleaned = (value or "").strip().lower()
    if cleaned not in _ALLOWED_CONNECTIONS:
        raise UnknownDeviceType(value)
    return cleaned


def normalize_connection_type(value: str | None) -> str | None:
    """Return a lowercase connection type, or ``None`` when it is not recognised."""

    cleaned = (value or "").strip().lower()
    return cleaned if cleaned in CONNECTION_TYPE_CHOICES else None


def allowed_connection_types(device_type: str) -> frozenset[str]:
    try:
        return _ALLOWED_CONNECTIONS[device_type]
    except (KeyError, TypeError):
        raise UnknownDeviceType(device_type) from None


def ordered_connection_types(device_type: str) -> list[str]:
    """Allowed connection types in the canonical display order."""

    allowed = allowed_connection_types(device_type)
    return [choice for choice in CONNECTION_TYPE_CHOICES if choice in allowed]


def is_supported_combination(device_type: str, connection_type: str) -> bool:
    return connection_type in allowed_connection_types(device_type)


def paper_sizes_for_printer_mode(mode: str | None) -> frozenset[str]:
    """Paper sizes that belong to ``mode``; an unknown mode has none."""

    return _PAPER_SIZES.get(mode or "", frozenset())


__all__ = [
    "CONNECTION_TYPE_BLUETOOTH",
    "CONNECTION_TYPE_CHOICES",
    "CONNECTION_TYPE_NETWORK",
    "CONNECTION_TYPE_USB",
    "ConnectionType",
    "DEVICE_TYPE_CASH_DRAWER",
    "DEVICE_TYPE_CHOICES",
    "DEVICE_TYPE_DISPLAY",
    "DEVICE_TYPE_PAYMENT_TERMINAL",
    "DEVICE_TYPE_PRINTER",
    "DEVICE_TYPE_SCALE",
    "DEVICE_TYPE_SCANNER",
    "DeviceType",
    "ENCODING_CHOICES",
    "PAPER_SIZE_CHOICES",
    "PAYMENT_PROVIDER_CHOICES",
    "PRINTER_MODE_CHOICES",
    "PRINTER_MODE_DOCUMENT",
    "PRINTER_MODE_LABEL",
    "PRINTER_MODE_THERMAL",
    "UnknownDeviceType",
    "UnsupportedCombination",
    "WEIGHT_UNIT_CHOICES",
    "allowed_connection_types",
    "is_supported_combination",
    "normalize_connection_type",
    "normalize_device_type",
    "ordered_connection_types",
    "paper_sizes_for_printer_mode",
]
