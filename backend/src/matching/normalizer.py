"""Token normalization for request lines.

All functions are pure and never raise: unknown or unparseable input yields
None, which the scorer treats as a neutral/partial-credit case.
"""

import re
from dataclasses import replace
from typing import Optional

from .ports import NormalizedAttributes, RequestLine
from .rules import MATERIAL_CODES

MM_PER_INCH = 25.4

_SIZE_PATTERN = re.compile(
    r'(?<![\d./])(\d+(?:\.\d+)?)(?:\s*(mm|inches|inch|in)\b|\s*(")|\s*$)',
    re.IGNORECASE,
)

GAUGE_MAPPING = {
    "light": "L",
    "l": "L",
    "medium": "M",
    "med": "M",
    "m": "M",
    "heavy": "H",
    "h": "H",
}


def normalize_size_mm(size_token: Optional[str]) -> Optional[float]:
    """Convert a size token to millimeters.

    Accepts "25mm", "25 mm", '1"', "1 inch", "0.5in" and a trailing bare
    number (read as millimeters). A number followed by any other unit, such
    as "25cm" or "2 m", is not a size.

    Args:
        size_token: Raw size text

    Returns:
        Size in millimeters or None if unparseable
    """
    if not size_token:
        return None

    match = _SIZE_PATTERN.search(size_token)
    if not match:
        return None

    value = float(match.group(1))
    unit = (match.group(2) or match.group(3) or "mm").lower()
    if unit == "mm":
        return value
    return round(value * MM_PER_INCH, 4)


def normalize_material(material_token: Optional[str]) -> Optional[str]:
    """Map free-text material to a canonical material code.

    FRPP is detected before PP because it is a refinement of PP.

    Args:
        material_token: Raw material text

    Returns:
        One of PVC, PP, FRPP, FR, MS, NYLON, HDPE, LDPE or None
    """
    if not material_token:
        return None

    lower = material_token.lower().strip()
    if not lower:
        return None

    if lower.upper() in MATERIAL_CODES:
        return lower.upper()

    if "frpp" in lower or "fr-pp" in lower or ("fr" in lower and "pp" in lower):
        return "FRPP"
    if "pvc" in lower:
        return "PVC"
    if "nylon" in lower:
        return "NYLON"
    if "hdpe" in lower:
        return "HDPE"
    if "ldpe" in lower:
        return "LDPE"
    if "ms" in lower or "gi" in lower or "galvanized" in lower:
        return "MS"
    if "pp" in lower or "polypropylene" in lower:
        return "PP"
    if "fr" in lower:
        return "FR"

    return None


def normalize_gauge(gauge_token: Optional[str]) -> Optional[str]:
    """Map gauge text to L, M or H (None if unknown)."""
    if not gauge_token:
        return None
    return GAUGE_MAPPING.get(gauge_token.lower().strip())


def normalize_color(color_token: Optional[str]) -> Optional[str]:
    if not color_token or not color_token.strip():
        return None
    return color_token.strip().lower()


def normalize_line(line: RequestLine) -> RequestLine:
    """Return a copy of the line with its normalized projection filled.

    Raw tokens take precedence; values already present on the normalized
    projection are canonicalized through the same rules.

    Args:
        line: Request line as produced by the parser

    Returns:
        New RequestLine with canonical size, material, gauge and color
    """
    raw = line.raw_tokens
    current = line.normalized

    size_mm = normalize_size_mm(raw.size_token)
    if size_mm is None and current.size_mm is not None and current.size_mm > 0:
        size_mm = float(current.size_mm)

    normalized = NormalizedAttributes(
        size_mm=size_mm,
        material=normalize_material(raw.material_token) or normalize_material(current.material),
        gauge=normalize_gauge(raw.gauge_token) or normalize_gauge(current.gauge),
        color=normalize_color(raw.color_token) or normalize_color(current.color),
    )
    return replace(line, normalized=normalized)
