"""Device-type configuration blocks.

Values are kept as plain strings and numbers: range and membership rules live
in :mod:`posdevices.services.validation` so a bad value can be reported
against its field instead of failing the whole payload at parse time.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _DeviceBlock(BaseModel):
    model_config = ConfigDict(extra="ignore")


class PrinterConfig(_DeviceBlock):
    device_type: Literal["printer"] = Field(default="printer", repr=False)
    mode: Optional[str] = None
    paper: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    auto: Optional[bool] = None
    copies: Optional[int] = None
    encoding: Optional[str] = None
    cut: Optional[bool] = None
    drawer: Optional[bool] = None
    kitchens: Optional[list[str]] = None
    zpl: Optional[bool] = None


class ScannerConfig(_DeviceBlock):
    device_type: Literal["scanner"] = Field(default="scanner", repr=False)
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    beep_on_scan: Optional[bool] = None


class PaymentConfig(_DeviceBlock):
    device_type: Literal["payment_terminal"] = Field(default="payment_terminal", repr=False)
    provider: Optional[str] = None
    sandbox_mode: Optional[bool] = None


class ScaleConfig(_DeviceBlock):
    device_type: Literal["scale"] = Field(default="scale", repr=False)
    unit: Optional[str] = None
    decimal_places: Optional[int] = None


class DrawerConfig(_DeviceBlock):
    device_type: Literal["cash_drawer"] = Field(default="cash_drawer", repr=False)
    open_command: Optional[str] = None


class DisplayConfig(_DeviceBlock):
    device_type: Literal["display"] = Field(default="display", repr=False)
    line_count: Optional[int] = None
    chars_per_line: Optional[int] = None


DeviceTypeConfig = Annotated[
    Union[PrinterConfig, ScannerConfig, PaymentConfig, ScaleConfig, DrawerConfig, DisplayConfig],
    Field(discriminator="device_type"),
]

DEVICE_BLOCK_FIELDS: dict[str, str] = {
    "printer": "printer_config",
    "scanner": "scanner_config",
    "payment_terminal": "payment_config",
    "scale": "scale_config",
    "cash_drawer": "drawer_config",
    "display": "display_config",
}

DEVICE_BLOCK_MODELS: dict[str, type[_DeviceBlock]] = {
    "printer": PrinterConfig,
    "scanner": ScannerConfig,
    "payment_terminal": PaymentConfig,
    "scale": ScaleConfig,
    "cash_drawer": DrawerConfig,
    "display": DisplayConfig,
}
