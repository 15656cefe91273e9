"""Compile ``name=value`` options into typed IPP attributes.

``add_options()`` fills a request with job template attributes (for job
operations) or ``xxx-default`` printer attributes (for everything else).
Values that don't parse or are out of range are skipped and logged at DEBUG
level; compilation itself never fails.
"""

import logging
import math
import re
from collections.abc import Callable, Mapping

from printerapp.ipp import (
    INTEGER_MAX,
    INTEGER_MIN,
    GroupTag,
    IppMessage,
    Operation,
    Resolution,
    ResolutionUnits,
    ValueTag,
    enum_value,
)
from printerapp.media import size_for_name

logger = logging.getLogger(__name__)

# Maximum number of media-ready values
MAX_SOURCE = 16

# Operations that take job template attributes
JOB_OPERATIONS = frozenset(
    {
        Operation.PRINT_JOB,
        Operation.PRINT_URI,
        Operation.VALIDATE_JOB,
        Operation.CREATE_JOB,
    }
)

# Attributes with dedicated handling, never compiled from job-creation-attributes-supported
FIXED_ATTRIBUTES = frozenset(
    {
        "copies",
        "finishings",
        "media",
        "orientation-requested",
        "print-color-mode",
        "print-content-optimize",
        "print-darkness",
        "print-quality",
        "print-scaling",
        "print-speed",
        "printer-resolution",
    }
)

# media-col members that can be given as media-xxx options
MEDIA_COL_MEMBERS = ("left-offset", "source", "top-offset", "tracking", "type")

# Valid ranges for enum fallbacks given as plain numbers
ORIENTATION_RANGE = (3, 7)  # portrait .. none
QUALITY_RANGE = (3, 5)  # draft .. high

# Hundredths of millimeters per length unit
LENGTH_UNITS = {"cm": 1000, "in": 2540, "mm": 100, "m": 100000}

_INTEGER = re.compile(r"\s*[+-]?[0-9]+")
_NUMBER = re.compile(r"\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_RESOLUTION_XY = re.compile(r"\s*([0-9]+)x([0-9]+)\s*(\S*)")
_RESOLUTION_X = re.compile(r"\s*([0-9]+)\s*(\S*)")


def parse_integer(
    value: str | None, minimum: int = INTEGER_MIN, maximum: int = INTEGER_MAX
) -> int | None:
    """Parse a whole string as a signed integer within a range.

    Args:
        value: String value.
        minimum: Smallest accepted value.
        maximum: Largest accepted value.

    Returns:
        int | None: The integer, or None if the string has trailing characters,
            is empty or is out of range.
    """
    if value is None or not _INTEGER.fullmatch(value):
        return None

    number = int(value)
    if number < minimum or number > maximum:
        return None
    return number


def get_length(value: str) -> int:
    """Convert a length string to hundredths of millimeters.

    The leading number may be followed by one of ``cm``, ``in``, ``mm`` or
    ``m``; anything else is taken as hundredths of millimeters already.
    Fractions are truncated toward zero.

    Args:
        value: Length string, e.g. '2cm', '0.5in' or '750'.

    Returns:
        int: Length in hundredths of millimeters (0 if there is no number).
    """
    match = _NUMBER.match(value)
    if match is None:
        return 0

    number = float(match.group()) * LENGTH_UNITS.get(value[match.end() :], 1)
    if not math.isfinite(number):
        return INTEGER_MAX if number > 0 else INTEGER_MIN
    return max(INTEGER_MIN, min(INTEGER_MAX, int(number)))


def parse_resolution(value: str) -> Resolution:
    """Parse a resolution string.

    Accepts ``XxYunits`` or ``Nunits`` (same value for both axes). Units
    default to ``dpi``; ``dpi`` is per inch and any other unit per centimeter.
    Unparseable values give 300dpi.

    Args:
        value: Resolution string, e.g. '600x300dpi' or '150'.

    Returns:
        Resolution: The parsed resolution.
    """
    if match := _RESOLUTION_XY.fullmatch(value):
        xres, yres, units = int(match.group(1)), int(match.group(2)), match.group(3)
    elif match := _RESOLUTION_X.fullmatch(value):
        xres = yres = int(match.group(1))
        units = match.group(2)
    else:
        logger.debug(f"Unparseable resolution '{value}', using 300dpi")
        xres = yres = 300
        units = "dpi"

    units = units or "dpi"
    return Resolution(
        xres, yres, ResolutionUnits.PER_INCH if units == "dpi" else ResolutionUnits.PER_CM
    )


def _get_option(options: Mapping[str, str], name: str) -> str | None:
    """Get an option by name, falling back to its ``-default`` form."""
    value = options.get(name)
    if value is None:
        value = options.get(f"{name}-default")
    return value


def _add_printer_description(request: IppMessage, options: Mapping[str, str]) -> None:
    """Add the printer description attributes that only exist as printer settings."""
    group = GroupTag.PRINTER

    if (value := options.get("label-mode-configured")) is not None:
        request.add_string(group, ValueTag.KEYWORD, "label-mode-configured", value)

    if (value := options.get("label-tear-offset-configured")) is not None:
        request.add_integer(
            group, ValueTag.INTEGER, "label-tear-offset-configured", get_length(value)
        )

    if (value := options.get("media-ready")) is not None:
        sources = value.split(",")
        if len(sources) > MAX_SOURCE:
            logger.debug(f"media-ready has {len(sources)} values, keeping {MAX_SOURCE}")
        request.add_strings(group, ValueTag.KEYWORD, "media-ready", sources[:MAX_SOURCE])

    if (value := options.get("printer-darkness-configured")) is not None:
        darkness = parse_integer(value, 0, 100)
        if darkness is not None:
            request.add_integer(group, ValueTag.INTEGER, "printer-darkness-configured", darkness)
        else:
            logger.debug(f"Skipping printer-darkness-configured='{value}'")

    if (value := options.get("printer-geo-location")) is not None:
        request.add_string(group, ValueTag.URI, "printer-geo-location", value)

    for name in ("printer-location", "printer-organization", "printer-organizational-unit"):
        if (value := options.get(name)) is not None:
            request.add_string(group, ValueTag.TEXT, name, value)


def _add_media(
    request: IppMessage, options: Mapping[str, str], group: GroupTag, is_default: bool
) -> None:
    """Add media-col when any media-xxx member is given, otherwise a plain media keyword."""
    media = _get_option(options, "media")
    members = {name: options.get(f"media-{name}") for name in MEDIA_COL_MEMBERS}

    if any(value is not None for value in members.values()):
        media_col = IppMessage()

        if (size := size_for_name(media)) is not None:
            media_size = IppMessage()
            media_size.add_integer(GroupTag.ZERO, ValueTag.INTEGER, "x-dimension", size.width)
            media_size.add_integer(GroupTag.ZERO, ValueTag.INTEGER, "y-dimension", size.length)
            media_col.add_collection(GroupTag.ZERO, "media-size", media_size)
        elif media is not None:
            logger.debug(f"Unknown media size '{media}', omitting media-size")

        for name, value in members.items():
            if value is None:
                continue
            if name.endswith("offset"):
                media_col.add_integer(
                    GroupTag.ZERO, ValueTag.INTEGER, f"media-{name}", get_length(value)
                )
            else:
                media_col.add_string(GroupTag.ZERO, ValueTag.KEYWORD, f"media-{name}", value)

        col_name = "media-col-default" if is_default else "media-col"
        request.add_collection(group, col_name, media_col)

    elif media is not None:
        name = "media-default" if is_default else "media"
        request.add_string(group, ValueTag.KEYWORD, name, media)


def _add_enum(
    request: IppMessage,
    group: GroupTag,
    name: str,
    scoped_name: str,
    value: str,
    valid: tuple[int, int],
) -> None:
    """Add an enum given either as a keyword or as a number within a range."""
    number = enum_value(name, value) or parse_integer(value, *valid)
    if number:
        request.add_integer(group, ValueTag.ENUM, scoped_name, number)
    else:
        logger.debug(f"Skipping {name}='{value}'")


def _add_vendor_boolean(request: IppMessage, group: GroupTag, name: str, value: str) -> None:
    request.add_boolean(group, name, value == "true")


def _add_vendor_integer(request: IppMessage, group: GroupTag, name: str, value: str) -> None:
    number = parse_integer(value)
    if number is not None:
        request.add_integer(group, ValueTag.INTEGER, name, number)
    else:
        logger.debug(f"Skipping {name}='{value}': not an integer")


def _add_vendor_keyword(request: IppMessage, group: GroupTag, name: str, value: str) -> None:
    request.add_string(group, ValueTag.KEYWORD, name, value)


# How vendor values are added, by the syntax of their xxx-supported attribute
VENDOR_HANDLERS: dict[ValueTag, Callable[[IppMessage, GroupTag, str, str], None]] = {
    ValueTag.BOOLEAN: _add_vendor_boolean,
    ValueTag.INTEGER: _add_vendor_integer,
    ValueTag.RANGE: _add_vendor_integer,
    ValueTag.KEYWORD: _add_vendor_keyword,
}


def _add_vendor_options(
    request: IppMessage,
    options: Mapping[str, str],
    supported: IppMessage,
    group: GroupTag,
    is_default: bool,
) -> None:
    """Add options named in job-creation-attributes-supported."""
    for name in supported.list_names("job-creation-attributes-supported"):
        if name in FIXED_ATTRIBUTES:
            continue

        value = _get_option(options, name)
        if value is None:
            continue

        scoped_name = f"{name}-default" if is_default else name
        syntax = supported.find_by_name(f"{name}-supported")

        if syntax is None:
            # Not described by the printer, pass through as text
            request.add_string(group, ValueTag.TEXT, scoped_name, value)
        elif (handler := VENDOR_HANDLERS.get(syntax)) is not None:
            handler(request, group, scoped_name, value)
        else:
            logger.debug(f"Skipping {name}: unsupported syntax {syntax.name}")


def add_options(
    request: IppMessage,
    options: Mapping[str, str],
    supported: IppMessage | None = None,
) -> None:
    """Add job template or printer default attributes from options.

    Job operations (Print-Job, Create-Job, ...) get job template attributes in
    the job group. All other operations get ``xxx-default`` attributes, plus
    printer description settings, in the printer group.

    Args:
        request: Request to add attributes to.
        options: Option names and string values.
        supported: Printer attributes response listing
            job-creation-attributes-supported and the matching
            ``xxx-supported`` values (None = no vendor options).
    """
    is_default = request.operation not in JOB_OPERATIONS
    group = GroupTag.PRINTER if is_default else GroupTag.JOB

    def scoped(name: str) -> str:
        return f"{name}-default" if is_default else name

    if is_default:
        _add_printer_description(request, options)

    if (value := _get_option(options, "copies")) is not None:
        copies = parse_integer(value, 1, 9999)
        if copies is not None:
            request.add_integer(group, ValueTag.INTEGER, scoped("copies"), copies)
        else:
            logger.debug(f"Skipping copies='{value}'")

    _add_media(request, options, group, is_default)

    if (value := _get_option(options, "orientation-requested")) is not None:
        _add_enum(
            request,
            group,
            "orientation-requested",
            scoped("orientation-requested"),
            value,
            ORIENTATION_RANGE,
        )

    for name in ("print-color-mode", "print-content-optimize"):
        if (value := _get_option(options, name)) is not None:
            request.add_string(group, ValueTag.KEYWORD, scoped(name), value)

    if (value := _get_option(options, "print-darkness")) is not None:
        darkness = parse_integer(value, -100, 100)
        if darkness is not None:
            request.add_integer(group, ValueTag.INTEGER, scoped("print-darkness"), darkness)
        else:
            logger.debug(f"Skipping print-darkness='{value}'")

    if (value := _get_option(options, "print-quality")) is not None:
        _add_enum(request, group, "print-quality", scoped("print-quality"), value, QUALITY_RANGE)

    if (value := _get_option(options, "print-scaling")) is not None:
        request.add_string(group, ValueTag.KEYWORD, scoped("print-scaling"), value)

    if (value := _get_option(options, "print-speed")) is not None:
        request.add_integer(group, ValueTag.INTEGER, scoped("print-speed"), get_length(value))

    if (value := _get_option(options, "printer-resolution")) is not None:
        resolution = parse_resolution(value)
        request.add_resolution(
            group,
            scoped("printer-resolution"),
            resolution.units,
            resolution.xres,
            resolution.yres,
        )

    if supported is not None:
        _add_vendor_options(request, options, supported, group, is_default)
