from __future__ import annotations

from ..core.hardware_types import (
    CONNECTION_TYPE_BLUETOOTH,
    CONNECTION_TYPE_NETWORK,
    CONNECTION_TYPE_USB,
    DEVICE_TYPE_CASH_DRAWER,
    DEVICE_TYPE_DISPLAY,
    DEVICE_TYPE_PAYMENT_TERMINAL,
    DEVICE_TYPE_PRINTER,
    DEVICE_TYPE_SCALE,
    DEVICE_TYPE_SCANNER,
    PRINTER_MODE_DOCUMENT,
    PRINTER_MODE_LABEL,
    PRINTER_MODE_THERMAL,
    UnknownDeviceType,
)
from ..schemas.connection import (
    DEFAULT_NETWORK_PORT,
    SPP_SERVICE_UUID,
    BluetoothConfig,
    NetworkConfig,
    USBConfig,
)
from ..schemas.device_config import (
    DisplayConfig,
    DrawerConfig,
    PaymentConfig,
    PrinterConfig,
    ScaleConfig,
    ScannerConfig,
)

DEFAULT_DRAWER_COMMAND = "ESC p 0 50 250"


def default_connection_config(connection_type: str) -> NetworkConfig | BluetoothConfig | USBConfig:
    """Starting block for a freshly chosen transport.

    Address fields start blank, so the block does not pass
    ``validate_connection_config`` until the operator fills them in.
    """

    if connection_type == CONNECTION_TYPE_NETWORK:
        return NetworkConfig(ip_address="", port=DEFAULT_NETWORK_PORT)
    if connection_type == CONNECTION_TYPE_BLUETOOTH:
        return BluetoothConfig(mac_address="", device_name="", service_uuid=SPP_SERVICE_UUID)
    if connection_type == CONNECTION_TYPE_USB:
        return USBConfig(vendor_id=0, product_id=0, usb_path="")
    raise ValueError(f"unknown connection type: {connection_type!r}")


def default_printer_config(mode: str | None = None) -> PrinterConfig:
    mode = mode or PRINTER_MODE_THERMAL
    if mode == PRINTER_MODE_THERMAL:
        return PrinterConfig(
            mode=PRINTER_MODE_THERMAL,
            paper="80mm",
            auto=True,
            copies=1,
            cut=True,
            drawer=False,
            encoding="utf8",
        )
    if mode == PRINTER_MODE_LABEL:
        return PrinterConfig(mode=PRINTER_MODE_LABEL, paper="4x6", zpl=True)
    if mode == PRINTER_MODE_DOCUMENT:
        return PrinterConfig(mode=PRINTER_MODE_DOCUMENT, paper="a4", copies=1)
    raise ValueError(f"unknown printer mode: {mode!r}")


def default_device_config(device_type: str, mode: str | None = None):
    """Starting block for ``device_type``; ``mode`` only matters for printers."""

    if device_type == DEVICE_TYPE_PRINTER:
        return default_printer_config(mode)
    if device_type == DEVICE_TYPE_SCANNER:
        return ScannerConfig(prefix="", suffix="\r\n", beep_on_scan=True)
    if device_type == DEVICE_TYPE_PAYMENT_TERMINAL:
        return PaymentConfig(provider="stripe", sandbox_mode=False)
    if device_type == DEVICE_TYPE_SCALE:
        return ScaleConfig(unit="kg", decimal_places=2)
    if device_type == DEVICE_TYPE_CASH_DRAWER:
        return DrawerConfig(open_command=DEFAULT_DRAWER_COMMAND)
    if device_type == DEVICE_TYPE_DISPLAY:
        return DisplayConfig(line_count=2, chars_per_line=20)
    raise UnknownDeviceType(device_type)


__all__ = [
    "DEFAULT_DRAWER_COMMAND",
    "default_connection_config",
    "default_device_config",
    "default_printer_config",
]
