"""HTTP surface for the device configuration model.

WHAT: Exposes the taxonomy, default device records and record validation.
WHEN: Called by the back-office edit forms before a device is saved upstream.
HOW: Nothing is stored here; every endpoint is a pure function of its input.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from ..core.hardware_types import (
    CONNECTION_TYPE_CHOICES,
    DEVICE_TYPE_CHOICES,
    PAYMENT_PROVIDER_CHOICES,
    PRINTER_MODE_CHOICES,
    WEIGHT_UNIT_CHOICES,
    UnknownDeviceType,
    ordered_connection_types,
    paper_sizes_for_printer_mode,
)
from ..core.options import (
    KITCHEN_SECTIONS,
    HardwareOption,
    connection_options_for_type,
    device_models_for_type,
    paper_size_options_for_mode,
)
from ..schemas.hardware import (
    ConnectionTypesOut,
    HardwareCreate,
    HardwareDeviceRecord,
    HardwareEdit,
    ValidationResultOut,
)
from ..services.devices import device_from_record, make_device, update_device
from ..services.validation import check_device

router = APIRouter(prefix="/api/v1/hardware", tags=["hardware"])


def _known_type_or_404(device_type: str) -> str:
    if device_type not in DEVICE_TYPE_CHOICES:
        raise HTTPException(404, f"Unknown device type {device_type!r}")
    return device_type


@router.get("/taxonomy")
def api_taxonomy() -> dict[str, Any]:
    return {
        "device_types": list(DEVICE_TYPE_CHOICES),
        "connection_types": list(CONNECTION_TYPE_CHOICES),
        "allowed_connections": {t: ordered_connection_types(t) for t in DEVICE_TYPE_CHOICES},
        "printer_modes": list(PRINTER_MODE_CHOICES),
        "paper_sizes": {m: sorted(paper_sizes_for_printer_mode(m)) for m in PRINTER_MODE_CHOICES},
        "weight_units": list(WEIGHT_UNIT_CHOICES),
        "payment_providers": list(PAYMENT_PROVIDER_CHOICES),
    }


@router.get("/types/{device_type}/connections", response_model=ConnectionTypesOut)
def api_connections(device_type: str):
    _known_type_or_404(device_type)
    return ConnectionTypesOut(type=device_type, connection_types=ordered_connection_types(device_type))


@router.get("/types/{device_type}/connection-options", response_model=list[HardwareOption])
def api_connection_options(device_type: str):
    _known_type_or_404(device_type)
    return connection_options_for_type(device_type)


@router.get("/types/{device_type}/models", response_model=list[HardwareOption])
def api_models(device_type: str):
    _known_type_or_404(device_type)
    return device_models_for_type(device_type)


@router.get("/printer-modes/{mode}/paper-sizes", response_model=list[HardwareOption])
def api_paper_sizes(mode: str):
    if mode not in PRINTER_MODE_CHOICES:
        raise HTTPException(404, f"Unknown printer mode {mode!r}")
    return paper_size_options_for_mode(mode)


@router.get("/kitchen-sections", response_model=list[HardwareOption])
def api_kitchen_sections():
    return list(KITCHEN_SECTIONS)


@router.post("/defaults")
def api_defaults(payload: HardwareCreate) -> dict[str, Any]:
    if payload.type not in DEVICE_TYPE_CHOICES:
        raise UnknownDeviceType(payload.type)
    if payload.mode is not None and payload.mode not in PRINTER_MODE_CHOICES:
        raise HTTPException(422, f"Unknown printer mode {payload.mode!r}")
    device = make_device(
        payload.id,
        payload.type,
        payload.connection_type,
        payload.name,
        mode=payload.mode,
        terminal_id=payload.terminal_id,
    )
    return device.to_record().to_wire()


@router.post("/validate", response_model=ValidationResultOut)
def api_validate(payload: HardwareDeviceRecord):
    return ValidationResultOut(**check_device(payload).as_dict())


@router.post("/edit")
def api_edit(payload: HardwareEdit) -> dict[str, Any]:
    """Apply an edit to a stored record and return the updated record.

    The record must have the right block layout, and tag changes are refused.
    Field values are not checked here; run ``/validate`` on the result.
    """

    try:
        changes = {key: value for key, value in payload.changes.items() if key != "device"}
        device = update_device(device_from_record(payload.device), **changes)
    except ValidationError as exc:
        raise HTTPException(422, f"Invalid block change: {exc.error_count()} error(s)") from exc
    return device.to_record().to_wire()
