"""Device construction and the edit lifecycle.

A device is created from a ``(type, connection_type)`` pair with default
blocks, edited field-by-field inside those blocks, and recreated (not
mutated) when either tag has to change.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel

from ..core.hardware_types import (
    UnsupportedCombination,
    allowed_connection_types,
    is_supported_combination,
    normalize_connection_type,
)
from ..schemas.connection import CONNECTION_BLOCK_FIELDS
from ..schemas.device_config import DEVICE_BLOCK_FIELDS
from ..schemas.hardware import HardwareDevice, HardwareDeviceRecord
from .defaults import default_connection_config, default_device_config
from .validation import ValidationReport, check_connection_config, check_device_config

logger = logging.getLogger(__name__)

# Fields an operator may change on an existing device.
_EDITABLE_FIELDS = ("name", "terminal_id", "enabled")
_IMMUTABLE_FIELDS = ("id", "type", "connection_type")


class ImmutableDeviceField(ValueError):
    """Raised when an edit tries to change a device's id or one of its tags."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"{field_name} cannot be changed in place; recreate the device instead")
        self.field_name = field_name


class DeviceRecordError(ValueError):
    """Raised when a wire record cannot be turned into a device."""

    def __init__(self, record: HardwareDeviceRecord, report: ValidationReport) -> None:
        problems = sorted([*report.errors, *report.missing_blocks])
        super().__init__(f"device {record.id!r} is malformed: {', '.join(problems)}")
        self.record = record
        self.report = report


def _utcnow() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _check_combination(device_type: str, connection_type: str) -> None:
    if not is_supported_combination(device_type, connection_type):
        raise UnsupportedCombination(device_type, connection_type)


def make_device(
    id: str,
    type: str,
    connection_type: str,
    name: Optional[str] = None,
    *,
    mode: Optional[str] = None,
    terminal_id: Optional[str] = None,
) -> HardwareDevice:
    """Build a device with default blocks for ``type`` and ``connection_type``.

    Raises ``UnknownDeviceType`` for a type outside the taxonomy and
    ``UnsupportedCombination`` when the pair is not in the compatibility table.
    """

    _check_combination(type, connection_type)
    device = HardwareDevice(
        id=id,
        name=name,
        terminal_id=terminal_id,
        enabled=True,
        connection_config=default_connection_config(connection_type),
        device_config=default_device_config(type, mode),
        created_at=_utcnow(),
    )
    logger.debug(
        "device.created",
        extra={"extra_data": {"device_id": id, "type": type, "connection_type": connection_type}},
    )
    return device


def get_connection_config(device: HardwareDevice | HardwareDeviceRecord):
    """The connection block selected by the device's own ``connection_type``."""

    if isinstance(device, HardwareDevice):
        return device.connection_config
    block_field = CONNECTION_BLOCK_FIELDS.get(device.connection_type)
    return device.block(block_field) if block_field else None


def get_device_config(device: HardwareDevice | HardwareDeviceRecord):
    """The device block selected by the device's own ``type``."""

    if isinstance(device, HardwareDevice):
        return device.device_config
    block_field = DEVICE_BLOCK_FIELDS.get(device.type)
    return device.block(block_field) if block_field else None


def device_from_record(record: HardwareDeviceRecord | Mapping[str, Any]) -> HardwareDevice:
    """Turn a wire record into a device, refusing records with the wrong block layout.

    Field values are not range-checked here; ``is_device_valid`` does that.
    """

    if not isinstance(record, HardwareDeviceRecord):
        record = HardwareDeviceRecord.model_validate(record)

    allowed = allowed_connection_types(record.type)
    report = ValidationReport()
    if normalize_connection_type(record.connection_type) != record.connection_type:
        report.add_error("connection_type", f"unknown connection type {record.connection_type!r}")
    elif record.connection_type not in allowed:
        report.add_error(
            "connection_type",
            f"connection type {record.connection_type!r} is not supported for {record.type!r}",
        )
    else:
        _collect_layout_problems(check_connection_config(record), report)
        _collect_layout_problems(check_device_config(record), report)
    if not report.ok:
        raise DeviceRecordError(record, report)

    return HardwareDevice(
        id=record.id,
        name=record.name,
        terminal_id=record.terminal_id,
        enabled=record.enabled,
        connection_config=get_connection_config(record).model_copy(deep=True),
        device_config=get_device_config(record).model_copy(deep=True),
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def _collect_layout_problems(source: ValidationReport, target: ValidationReport) -> None:
    # Only block presence matters for conversion; field errors are for the validator.
    for block in source.missing_blocks:
        target.add_missing(block)
    for path, reason in source.errors.items():
        if "." not in path:
            target.add_error(path, reason)


def _merge_block(block: BaseModel, changes: Mapping[str, Any] | BaseModel, tag: str) -> BaseModel:
    if isinstance(changes, BaseModel):
        changes = changes.model_dump(exclude_unset=True) | {tag: getattr(changes, tag)}
    if tag in changes and changes[tag] != getattr(block, tag):
        raise ImmutableDeviceField(tag)
    data = block.model_dump()
    data.update({key: value for key, value in changes.items() if key != tag})
    return type(block).model_validate(data)


def update_device(device: HardwareDevice, **changes: Any) -> HardwareDevice:
    """Return a copy of ``device`` with ``changes`` applied.

    ``connection_config`` / ``device_config`` take partial dicts that are merged
    into the existing blocks. Unknown keys are ignored so stale clients do not
    break; ``id``, ``type`` and ``connection_type`` are refused.
    """

    for field_name in _IMMUTABLE_FIELDS:
        if field_name in changes and changes[field_name] != getattr(device, field_name):
            raise ImmutableDeviceField(field_name)

    updates: dict[str, Any] = {key: changes[key] for key in _EDITABLE_FIELDS if key in changes}
    if changes.get("connection_config"):
        updates["connection_config"] = _merge_block(
            device.connection_config, changes["connection_config"], "connection_type"
        )
    if changes.get("device_config"):
        updates["device_config"] = _merge_block(device.device_config, changes["device_config"], "device_type")
    if not updates:
        return device

    updates["updated_at"] = _utcnow()
    return device.model_copy(update=updates, deep=True)


def set_enabled(device: HardwareDevice, enabled: bool) -> HardwareDevice:
    return update_device(device, enabled=enabled)


def recreate_device(
    device: HardwareDevice,
    *,
    type: Optional[str] = None,
    connection_type: Optional[str] = None,
    mode: Optional[str] = None,
) -> HardwareDevice:
    """Replace a device whose type or transport changed, keeping its identity.

    The new device gets fresh default blocks; nothing is carried over from the
    old blocks.
    """

    fresh = make_device(
        device.id,
        type or device.type,
        connection_type or device.connection_type,
        device.name,
        mode=mode,
        terminal_id=device.terminal_id,
    )
    return fresh.model_copy(update={"enabled": device.enabled, "created_at": device.created_at or fresh.created_at})


def filter_devices(
    devices: Iterable[HardwareDevice],
    *,
    terminal_id: Optional[str] = None,
    type: Optional[str] = None,
) -> list[HardwareDevice]:
    """Apply the list filters the device API accepts (``terminal_id``, ``type``)."""

    result = []
    for device in devices:
        if terminal_id is not None and device.terminal_id != terminal_id:
            continue
        if type is not None and device.type != type:
            continue
        result.append(device)
    return result


__all__ = [
    "DeviceRecordError",
    "ImmutableDeviceField",
    "device_from_record",
    "filter_devices",
    "get_connection_config",
    "get_device_config",
    "make_device",
    "recreate_device",
    "set_enabled",
    "update_device",
]
