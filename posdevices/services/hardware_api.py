from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..schemas.hardware import HardwareDevice, HardwareDevicePage, HardwareDeviceRecord
from ..settings import get_settings
from .validation import ValidationReport, check_device

logger = logging.getLogger(__name__)


class HardwareApiNotConfigured(Exception):
    """Raised when the tenant/store scope for the device API is missing."""


class DeviceValidationError(ValueError):
    """Raised instead of sending a device record that fails validation."""

    def __init__(self, device_id: str, report: ValidationReport) -> None:
        super().__init__(f"device {device_id!r} failed validation")
        self.device_id = device_id
        self.report = report


def _raise_for_status(response: httpx.Response, context: str) -> None:
    if response.status_code in {401, 403}:
        logger.warning("Hardware API authentication failed for %s", context)
    elif response.status_code >= 500:
        logger.error("Hardware API error %s during %s", response.status_code, context)
    elif response.status_code >= 400:
        logger.error("Hardware API request error %s during %s", response.status_code, context)
    response.raise_for_status()


def _validated_body(device: HardwareDevice | HardwareDeviceRecord) -> Dict[str, Any]:
    record = device.to_record() if isinstance(device, HardwareDevice) else device
    report = check_device(record)
    if not report.ok:
        raise DeviceValidationError(record.id, report)
    return record.to_wire()


def _page(payload: Any) -> HardwareDevicePage:
    # The list endpoint returns either a bare array or {"hardware": [...], "next": ...}.
    if isinstance(payload, dict):
        return HardwareDevicePage.model_validate(payload)
    return HardwareDevicePage(hardware=[HardwareDeviceRecord.model_validate(item) for item in payload or []])


class HardwareApiClient:
    """Async client for the store's ``config/hardware`` endpoints.

    Writes are validated locally first; a record that fails
    :func:`~posdevices.services.validation.check_device` is never sent.
    """

    def __init__(
        self,
        base_url: str,
        tenant_id: str,
        store_id: str,
        *,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not tenant_id or not store_id:
            raise HardwareApiNotConfigured("tenant_id and store_id are required")
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self._root = f"/{tenant_id}/store/{store_id}/config/hardware"

    @classmethod
    def from_settings(cls, **kwargs: Any) -> "HardwareApiClient":
        settings = get_settings()
        return cls(
            settings.HARDWARE_API_BASE_URL,
            settings.TENANT_ID,
            settings.STORE_ID,
            token=settings.HARDWARE_API_TOKEN or None,
            timeout=settings.HARDWARE_API_TIMEOUT,
            **kwargs,
        )

    async def __aenter__(self) -> "HardwareApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_devices_page(
        self,
        *,
        terminal_id: Optional[str] = None,
        type: Optional[str] = None,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> HardwareDevicePage:
        """Fetch one page; pass the returned ``next`` back as ``cursor`` for the following one."""

        params: Dict[str, Any] = {
            key: value
            for key, value in (("terminal_id", terminal_id), ("type", type), ("limit", limit), ("next", cursor))
            if value
        }
        response = await self._client.get(self._root, params=params)
        _raise_for_status(response, "list devices")
        return _page(response.json())

    async def list_devices(
        self,
        *,
        terminal_id: Optional[str] = None,
        type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[HardwareDeviceRecord]:
        """Every device of the store, following ``next`` cursors until the last page."""

        records: List[HardwareDeviceRecord] = []
        cursor: Optional[str] = None
        while True:
            page = await self.list_devices_page(terminal_id=terminal_id, type=type, limit=limit, cursor=cursor)
            records.extend(page.hardware)
            if not page.next or page.next == cursor:
                return records
            cursor = page.next

    async def get_device(self, device_id: str) -> HardwareDeviceRecord:
        response = await self._client.get(f"{self._root}/{device_id}")
        _raise_for_status(response, f"get device {device_id}")
        return HardwareDeviceRecord.model_validate(response.json())

    async def create_device(self, device: HardwareDevice | HardwareDeviceRecord) -> Dict[str, Any]:
        """Returns the API acknowledgement, ``{"message": ..., "id": ...}``."""

        body = _validated_body(device)
        logger.info("Creating hardware device %s", body["id"])
        response = await self._client.post(self._root, json=body)
        _raise_for_status(response, f"create device {body['id']}")
        return response.json()

    async def update_device(self, device: HardwareDevice | HardwareDeviceRecord) -> Dict[str, Any]:
        body = _validated_body(device)
        device_id = body.pop("id")
        logger.info("Updating hardware device %s", device_id)
        response = await self._client.put(f"{self._root}/{device_id}", json=body)
        _raise_for_status(response, f"update device {device_id}")
        return response.json()

    async def delete_device(self, device_id: str) -> Dict[str, Any]:
        logger.info("Deleting hardware device %s", device_id)
        response = await self._client.delete(f"{self._root}/{device_id}")
        _raise_for_status(response, f"delete device {device_id}")
        return response.json() if response.content else {}

    async def test_device(self, device_id: str) -> Dict[str, Any]:
        """Ask the back office to ping the device; returns ``{success, message}``."""

        response = await self._client.post(f"{self._root}/{device_id}/test")
        _raise_for_status(response, f"test device {device_id}")
        return response.json()


__all__ = [
    "DeviceValidationError",
    "HardwareApiClient",
    "HardwareApiNotConfigured",
]
