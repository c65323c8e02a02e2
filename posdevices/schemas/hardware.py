"""Device record shapes.

WHAT: ``HardwareDevice`` is the in-memory aggregate used by the services; it
holds exactly one connection block and one device block, and its ``type`` and
``connection_type`` are read off those blocks. ``HardwareDeviceRecord`` is the
flat payload exchanged with the device-management REST API, where every block
is an optional field and nothing stops a client from sending two of them.
WHEN: Records come in from HTTP bodies and API responses; devices are what the
edit flow works on.
HOW: ``HardwareDevice.to_record`` flattens a device; the reverse direction goes
through :func:`posdevices.services.devices.device_from_record`, which checks
the record first.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .connection import (
    CONNECTION_BLOCK_FIELDS,
    BluetoothConfig,
    ConnectionConfig,
    NetworkConfig,
    USBConfig,
)
from .device_config import (
    DEVICE_BLOCK_FIELDS,
    DeviceTypeConfig,
    DisplayConfig,
    DrawerConfig,
    PaymentConfig,
    PrinterConfig,
    ScaleConfig,
    ScannerConfig,
)

# Block tags stay out of the wire payload.
_WIRE_EXCLUDE: dict[str, Any] = {
    **{field: {"connection_type"} for field in CONNECTION_BLOCK_FIELDS.values()},
    **{field: {"device_type"} for field in DEVICE_BLOCK_FIELDS.values()},
}


class HardwareDeviceRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None
    type: str
    connection_type: str
    terminal_id: Optional[str] = None
    enabled: bool = True

    network_config: Optional[NetworkConfig] = None
    bluetooth_config: Optional[BluetoothConfig] = None
    usb_config: Optional[USBConfig] = None

    printer_config: Optional[PrinterConfig] = None
    scanner_config: Optional[ScannerConfig] = None
    payment_config: Optional[PaymentConfig] = None
    scale_config: Optional[ScaleConfig] = None
    drawer_config: Optional[DrawerConfig] = None
    display_config: Optional[DisplayConfig] = None

    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def block(self, field_name: str) -> Optional[BaseModel]:
        return getattr(self, field_name, None)

    def populated_connection_blocks(self) -> list[str]:
        return [field for field in CONNECTION_BLOCK_FIELDS.values() if self.block(field) is not None]

    def populated_device_blocks(self) -> list[str]:
        return [field for field in DEVICE_BLOCK_FIELDS.values() if self.block(field) is not None]

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready body for the REST API (unset fields dropped)."""

        return self.model_dump(mode="json", exclude_none=True, exclude=_WIRE_EXCLUDE)


class HardwareDevice(BaseModel):
    id: str
    name: Optional[str] = None
    terminal_id: Optional[str] = None
    enabled: bool = True
    connection_config: ConnectionConfig
    device_config: DeviceTypeConfig
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def type(self) -> str:
        return self.device_config.device_type

    @property
    def connection_type(self) -> str:
        return self.connection_config.connection_type

    def to_record(self) -> HardwareDeviceRecord:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "connection_type": self.connection_type,
            "terminal_id": self.terminal_id,
            "enabled": self.enabled,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            CONNECTION_BLOCK_FIELDS[self.connection_type]: self.connection_config.model_copy(deep=True),
            DEVICE_BLOCK_FIELDS[self.type]: self.device_config.model_copy(deep=True),
        }
        return HardwareDeviceRecord(**data)


class HardwareCreate(BaseModel):
    id: str
    type: str
    connection_type: str
    name: Optional[str] = None
    mode: Optional[str] = None
    terminal_id: Optional[str] = None


class HardwareDevicePage(BaseModel):
    """One page of the device list; ``next`` is the cursor for the following page."""

    hardware: list[HardwareDeviceRecord] = Field(default_factory=list)
    next: Optional[str] = None


class HardwareEdit(BaseModel):
    device: HardwareDeviceRecord
    changes: dict[str, Any] = Field(default_factory=dict)


class ValidationResultOut(BaseModel):
    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)
    missing_blocks: list[str] = Field(default_factory=list)


class ConnectionTypesOut(BaseModel):
    type: str
    connection_types: list[str]
