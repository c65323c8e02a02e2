"""USB identifier formatting for the configuration forms.

Operators type vendor/product ids the way ``lsusb`` prints them
(``0x04B8``), while the device record stores the plain integer. These helpers
are the only place that converts between the two.
"""

from __future__ import annotations

import re

__all__ = ["MAX_USB_ID", "format_usb_id", "parse_usb_id"]


MAX_USB_ID = 0xFFFF

_HEX_RE = re.compile(r"[0-9A-Fa-f]{1,4}")


def format_usb_id(value: int | None) -> str:
    """Render ``value`` as ``0xXXXX``; unset ids (``None`` or 0) render blank."""

    if not value:
        return ""
    return "0x" + format(value, "X").zfill(4)


def parse_usb_id(raw: str | int | None) -> int:
    """Return the integer behind a hex id typed into a form.

    * Integers pass through when they fit in 16 bits.
    * Blank input means "not set yet" and maps to 0.
    * The ``0x``/``0X`` prefix is optional; the digits are always hexadecimal.
    """

    if raw is None:
        return 0
    if isinstance(raw, bool):
        raise ValueError(f"not a 16-bit hex id: {raw!r}")
    if isinstance(raw, int):
        if not 0 <= raw <= MAX_USB_ID:
            raise ValueError(f"USB id out of range: {raw!r}")
        return raw

    cleaned = raw.strip()
    if cleaned[:2] in ("0x", "0X"):
        cleaned = cleaned[2:]
    if not cleaned:
        return 0
    if not _HEX_RE.fullmatch(cleaned):
        raise ValueError(f"not a 16-bit hex id: {raw!r}")
    return int(cleaned, 16)
