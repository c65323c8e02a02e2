"""Dropdown option tables for the device configuration screens.

These lists only feed presentation: labels, descriptions and the model
catalogue per device type. Validation never looks at them beyond the plain
choice tuples in :mod:`posdevices.core.hardware_types`.
"""

from __future__ import annotations

from pydantic import BaseModel

from .hardware_types import (
    DEVICE_TYPE_CASH_DRAWER,
    DEVICE_TYPE_DISPLAY,
    DEVICE_TYPE_PAYMENT_TERMINAL,
    DEVICE_TYPE_PRINTER,
    DEVICE_TYPE_SCALE,
    DEVICE_TYPE_SCANNER,
    ordered_connection_types,
)


class HardwareOption(BaseModel):
    id: str
    label: str
    value: str
    description: str | None = None


def _opt(value: str, label: str, description: str | None = None) -> HardwareOption:
    return HardwareOption(id=value, label=label, value=value, description=description)


DEVICE_TYPES: list[HardwareOption] = [
    _opt("printer", "Printer", "Receipt, kitchen, label, or document printers"),
    _opt("scanner", "Scanner", "Barcode scanners"),
    _opt("cash_drawer", "Cash Drawer", "Cash drawers"),
    _opt("scale", "Scale", "Weighing scales"),
    _opt("payment_terminal", "Payment Terminal", "Card payment terminals"),
    _opt("display", "Display", "Customer-facing displays, KDS screens"),
]

CONNECTION_TYPES: list[HardwareOption] = [
    _opt("usb", "USB", "USB connected devices"),
    _opt("network", "Network", "TCP/IP network connected devices"),
    _opt("bluetooth", "Bluetooth", "Bluetooth connected devices"),
]

PRINTER_MODES: list[HardwareOption] = [
    _opt("thermal", "Thermal Receipt Printer", "ESC/POS thermal printers for receipts and kitchen orders"),
    _opt("label", "Label Printer", "Label/barcode printers (ZPL compatible)"),
    _opt("document", "Document Printer", "A4/Letter document printers"),
]

THERMAL_PAPER_SIZES: list[HardwareOption] = [
    _opt("80mm", '80mm (3.15")', "Standard receipt paper"),
    _opt("58mm", '58mm (2.25")', "Narrow receipt paper"),
]

DOCUMENT_PAPER_SIZES: list[HardwareOption] = [
    _opt("a4", "A4", "210 x 297 mm"),
    _opt("a5", "A5", "148 x 210 mm"),
    _opt("letter", "Letter", "8.5 x 11 inches"),
]

LABEL_PAPER_SIZES: list[HardwareOption] = [
    _opt("4x6", "4x6 inches", "Standard shipping label"),
]

CHARACTER_ENCODINGS: list[HardwareOption] = [
    _opt("utf8", "UTF-8", "Unicode (recommended)"),
    _opt("gbk", "GBK", "Chinese character encoding"),
]

WEIGHT_UNITS: list[HardwareOption] = [
    _opt("kg", "Kilograms (kg)", "Metric system"),
    _opt("lb", "Pounds (lb)", "Imperial system"),
    _opt("g", "Grams (g)", "Metric system, small portions"),
]

PAYMENT_PROVIDERS: list[HardwareOption] = [
    _opt("stripe", "Stripe", "Stripe payment processing"),
    _opt("pax", "PAX", "PAX terminals"),
    _opt("verifone", "Verifone", "Verifone terminals"),
    _opt("ingenico", "Ingenico", "Ingenico terminals"),
    _opt("clover", "Clover", "Clover POS system"),
]

KITCHEN_SECTIONS: list[HardwareOption] = [
    _opt("hot_kitchen", "Hot Kitchen", "Main cooking area"),
    _opt("cold_kitchen", "Cold Kitchen", "Salads and cold items"),
    _opt("grill", "Grill Station", "Grilling area"),
    _opt("fryer", "Fryer Station", "Deep frying area"),
    _opt("salad", "Salad Station", "Salad preparation"),
    _opt("bakery", "Bakery", "Baking area"),
    _opt("bar", "Bar", "Beverage station"),
    _opt("dessert", "Dessert Station", "Desserts and pastries"),
]

PRINTER_MODELS: list[HardwareOption] = [
    _opt("epson_tm_t88v", "Epson TM-T88V", "Popular thermal receipt printer"),
    _opt("epson_tm_t88vi", "Epson TM-T88VI", "Latest Epson thermal printer"),
    _opt("epson_tm_t20", "Epson TM-T20", "Entry-level thermal printer"),
    _opt("star_tsp143", "Star TSP143", "Compact thermal printer"),
    _opt("star_tsp650", "Star TSP650", "High-speed thermal printer"),
    _opt("star_sm_l200", "Star SM-L200", "Mobile receipt printer"),
    _opt("citizen_ct_s310", "Citizen CT-S310", "Reliable thermal printer"),
    _opt("bixolon_srp_350", "Bixolon SRP-350", "Affordable thermal printer"),
    _opt("zebra_zd410", "Zebra ZD410", "Compact label printer"),
    _opt("zebra_zd620", "Zebra ZD620", "Advanced label printer"),
    _opt("brother_ql820nwb", "Brother QL-820NWB", "Wireless label printer"),
]

SCANNER_MODELS: list[HardwareOption] = [
    _opt("symbol_ls2208", "Symbol LS2208", "Handheld barcode scanner"),
    _opt("honeywell_1900g", "Honeywell 1900g", "High-performance scanner"),
    _opt("zebra_ds2208", "Zebra DS2208", "Digital scanner"),
    _opt("datalogic_quickscan", "Datalogic QuickScan", "Fast scanning"),
    _opt("socket_mobile_s700", "Socket Mobile S700", "Wireless Bluetooth scanner"),
]

CASH_DRAWER_MODELS: list[HardwareOption] = [
    _opt("star_smd2", "Star SMD2", "Standard cash drawer"),
    _opt("epson_dk_5", "Epson DK-5", "Heavy-duty drawer"),
    _opt("posiflex_cr4000", "Posiflex CR4000", "Compact cash drawer"),
    _opt("apg_vasario", "APG Vasario", "Premium cash drawer"),
]

SCALE_MODELS: list[HardwareOption] = [
    _opt("cas_ap1", "CAS AP-1", "Retail scale"),
    _opt("mettler_toledo", "Mettler Toledo", "Professional scale"),
    _opt("ohaus_navigator", "Ohaus Navigator", "Heavy-duty scale"),
]

PAYMENT_TERMINAL_MODELS: list[HardwareOption] = [
    _opt("stripe_s700", "Stripe S700", "Stripe smart terminal"),
    _opt("stripe_reader_m2", "Stripe Reader M2", "Mobile card reader"),
    _opt("pax_a920", "PAX A920", "Android payment terminal"),
    _opt("verifone_vx520", "Verifone VX520", "Countertop terminal"),
    _opt("clover_flex", "Clover Flex", "Handheld terminal"),
]

DISPLAY_MODELS: list[HardwareOption] = [
    _opt("customer_display_2x20", "VFD Display (2x20)", "2-line, 20 character display"),
    _opt("customer_display_4x20", "VFD Display (4x20)", "4-line, 20 character display"),
    _opt("kds_tablet", "KDS Tablet", "Kitchen display tablet"),
]

_MODELS_BY_TYPE: dict[str, list[HardwareOption]] = {
    DEVICE_TYPE_PRINTER: PRINTER_MODELS,
    DEVICE_TYPE_SCANNER: SCANNER_MODELS,
    DEVICE_TYPE_CASH_DRAWER: CASH_DRAWER_MODELS,
    DEVICE_TYPE_SCALE: SCALE_MODELS,
    DEVICE_TYPE_PAYMENT_TERMINAL: PAYMENT_TERMINAL_MODELS,
    DEVICE_TYPE_DISPLAY: DISPLAY_MODELS,
}

_PAPER_OPTIONS_BY_MODE: dict[str, list[HardwareOption]] = {
    "thermal": THERMAL_PAPER_SIZES,
    "document": DOCUMENT_PAPER_SIZES,
    "label": LABEL_PAPER_SIZES,
}


def device_models_for_type(device_type: str) -> list[HardwareOption]:
    return list(_MODELS_BY_TYPE.get(device_type, []))


def paper_size_options_for_mode(mode: str) -> list[HardwareOption]:
    return list(_PAPER_OPTIONS_BY_MODE.get(mode, []))


def connection_options_for_type(device_type: str) -> list[HardwareOption]:
    """Connection dropdown entries filtered through the compatibility table."""

    allowed = ordered_connection_types(device_type)
    return [option for option in CONNECTION_TYPES if option.value in allowed]


def provider_list() -> list[HardwareOption]:
    return list(PAYMENT_PROVIDERS)


def weight_unit_list() -> list[HardwareOption]:
    return list(WEIGHT_UNITS)


__all__ = [
    "CHARACTER_ENCODINGS",
    "CONNECTION_TYPES",
    "DEVICE_TYPES",
    "HardwareOption",
    "KITCHEN_SECTIONS",
    "PRINTER_MODES",
    "connection_options_for_type",
    "device_models_for_type",
    "paper_size_options_for_mode",
    "provider_list",
    "weight_unit_list",
]
