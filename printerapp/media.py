"""Media size lookup for PWG 5101.1 self-describing media names."""

import re
from dataclasses import dataclass

# class_name_WxHunits, e.g. iso_a4_210x297mm or na_letter_8.5x11in
_PWG_NAME = re.compile(
    r"^[a-z0-9]+_[a-z0-9.\-]+_(?P<width>\d+(?:\.\d+)?)x(?P<length>\d+(?:\.\d+)?)(?P<units>mm|in)$"
)

# Hundredths of millimeters per unit
_UNIT_SCALE = {"mm": 100, "in": 2540}

# Common legacy names and their PWG equivalents
LEGACY_NAMES = {
    "letter": "na_letter_8.5x11in",
    "legal": "na_legal_8.5x14in",
    "executive": "na_executive_7.25x10.5in",
    "tabloid": "na_ledger_11x17in",
    "4x6": "na_index-4x6_4x6in",
    "5x7": "na_5x7_5x7in",
    "a3": "iso_a3_297x420mm",
    "a4": "iso_a4_210x297mm",
    "a5": "iso_a5_148x210mm",
    "a6": "iso_a6_105x148mm",
    "b5": "iso_b5_176x250mm",
    "env10": "na_number-10_4.125x9.5in",
    "dl": "iso_dl_110x220mm",
}


@dataclass(frozen=True)
class MediaSize:
    """Media dimensions in hundredths of millimeters."""

    pwg: str
    width: int
    length: int


def size_for_name(name: str | None) -> MediaSize | None:
    """Get the dimensions of a named media size.

    Args:
        name: PWG self-describing media name or a common legacy name.

    Returns:
        MediaSize | None: Dimensions, or None if the name is not recognized.
    """
    if not name:
        return None

    pwg = LEGACY_NAMES.get(name.lower(), name)
    match = _PWG_NAME.match(pwg)
    if not match:
        return None

    scale = _UNIT_SCALE[match.group("units")]
    width = round(float(match.group("width")) * scale)
    length = round(float(match.group("length")) * scale)
    return MediaSize(pwg=pwg, width=width, length=length)
