from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..services.devices import DeviceRecordError, ImmutableDeviceField
from .hardware_types import UnknownDeviceType, UnsupportedCombination

logger = logging.getLogger(__name__)

UNPROCESSABLE = 422


class ErrorEnvelope(JSONResponse):
    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"code": code, "message": message}
        if details is not None:
            payload["details"] = details
        super().__init__(payload, status_code=status_code, headers=headers)


def _phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    message = detail if isinstance(detail, str) else _phrase(exc.status_code)
    details = detail if isinstance(detail, dict) else None
    return ErrorEnvelope(status_code=exc.status_code, code="http_error", message=message, details=details)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return ErrorEnvelope(
        status_code=UNPROCESSABLE,
        code="validation_error",
        message="Validation failed",
        details={"errors": jsonable_errors(exc.errors())},
    )


async def unknown_device_type_handler(request: Request, exc: UnknownDeviceType):
    return ErrorEnvelope(
        status_code=UNPROCESSABLE,
        code="unknown_device_type",
        message=str(exc),
        details={"type": str(exc.device_type)},
    )


async def unsupported_combination_handler(request: Request, exc: UnsupportedCombination):
    logger.warning("device.unsupported_combination", extra={"extra_data": {"type": exc.device_type}})
    return ErrorEnvelope(
        status_code=UNPROCESSABLE,
        code="unsupported_combination",
        message=str(exc),
        details={"type": exc.device_type, "connection_type": str(exc.connection_type)},
    )


async def device_record_error_handler(request: Request, exc: DeviceRecordError):
    return ErrorEnvelope(
        status_code=UNPROCESSABLE,
        code="malformed_device",
        message=str(exc),
        details=exc.report.as_dict(),
    )


async def immutable_field_handler(request: Request, exc: ImmutableDeviceField):
    return ErrorEnvelope(
        status_code=UNPROCESSABLE,
        code="immutable_field",
        message=str(exc),
        details={"field": exc.field_name},
    )


def jsonable_errors(errors: Any) -> list[dict[str, Any]]:
    # Pydantic error contexts may hold exception instances.
    cleaned = []
    for error in errors:
        item = {key: value for key, value in error.items() if key != "ctx"}
        if "ctx" in error:
            item["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        cleaned.append(item)
    return cleaned


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(UnknownDeviceType, unknown_device_type_handler)
    app.add_exception_handler(UnsupportedCombination, unsupported_combination_handler)
    app.add_exception_handler(DeviceRecordError, device_record_error_handler)
    app.add_exception_handler(ImmutableDeviceField, immutable_field_handler)
