"""Connection configuration blocks, one per transport.

Each block carries a literal ``connection_type`` tag so a device can hold a
single :data:`ConnectionConfig` value instead of three optional fields. The
tag is never sent over the wire; the wire field name (``network_config`` and
friends) already says which block it is.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_NETWORK_PORT = 9100
SPP_SERVICE_UUID = "00001101-0000-1000-8000-00805F9B34FB"


class _ConnectionBlock(BaseModel):
    model_config = ConfigDict(extra="ignore")


class NetworkConfig(_ConnectionBlock):
    connection_type: Literal["network"] = Field(default="network", repr=False)
    ip_address: Optional[str] = ""
    port: Optional[int] = DEFAULT_NETWORK_PORT


class BluetoothConfig(_ConnectionBlock):
    connection_type: Literal["bluetooth"] = Field(default="bluetooth", repr=False)
    mac_address: Optional[str] = ""
    device_name: Optional[str] = None
    service_uuid: Optional[str] = None


class USBConfig(_ConnectionBlock):
    connection_type: Literal["usb"] = Field(default="usb", repr=False)
    vendor_id: Optional[int] = 0
    product_id: Optional[int] = 0
    usb_path: Optional[str] = None


ConnectionConfig = Annotated[
    Union[NetworkConfig, BluetoothConfig, USBConfig],
    Field(discriminator="connection_type"),
]

# Wire field name for each connection block.
CONNECTION_BLOCK_FIELDS: dict[str, str] = {
    "network": "network_config",
    "bluetooth": "bluetooth_config",
    "usb": "usb_config",
}

CONNECTION_BLOCK_MODELS: dict[str, type[_ConnectionBlock]] = {
    "network": NetworkConfig,
    "bluetooth": BluetoothConfig,
    "usb": USBConfig,
}
