"""Pure device-configuration operations (defaults, validation, lifecycle)."""

from __future__ import annotations

from .defaults import default_connection_config, default_device_config
from .devices import (
    DeviceRecordError,
    ImmutableDeviceField,
    device_from_record,
    filter_devices,
    get_connection_config,
    get_device_config,
    make_device,
    recreate_device,
    set_enabled,
    update_device,
)
from .validation import (
    ValidationReport,
    check_connection_config,
    check_device,
    check_device_config,
    is_device_valid,
    validate_connection_config,
    validate_device_config,
)

__all__ = [
    "DeviceRecordError",
    "ImmutableDeviceField",
    "ValidationReport",
    "check_connection_config",
    "check_device",
    "check_device_config",
    "default_connection_config",
    "default_device_config",
    "device_from_record",
    "filter_devices",
    "get_connection_config",
    "get_device_config",
    "is_device_valid",
    "make_device",
    "recreate_device",
    "set_enabled",
    "update_device",
    "validate_connection_config",
    "validate_device_config",
]
