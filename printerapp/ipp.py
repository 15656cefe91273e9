"""In-memory IPP message model.

Requests, responses and collection values share one container, ``IppMessage``,
holding typed attributes partitioned by group. Encoding messages on the wire is
left to the transport that sends them.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class Operation(IntEnum):
    """IPP operation codes used by printer application clients."""

    PRINT_JOB = 0x0002
    PRINT_URI = 0x0003
    VALIDATE_JOB = 0x0004
    CREATE_JOB = 0x0005
    GET_JOB_ATTRIBUTES = 0x0009
    GET_JOBS = 0x000A
    GET_PRINTER_ATTRIBUTES = 0x000B
    SET_PRINTER_ATTRIBUTES = 0x0013
    CREATE_PRINTER = 0x004C
    DELETE_PRINTER = 0x0057
    GET_PRINTERS = 0x0058
    GET_SYSTEM_ATTRIBUTES = 0x005B
    SET_SYSTEM_ATTRIBUTES = 0x0063
    SHUTDOWN_ALL_PRINTERS = 0x0064
    CUPS_GET_DEFAULT = 0x4001


class GroupTag(IntEnum):
    """Attribute group delimiter tags (ZERO marks collection members)."""

    ZERO = 0x00
    OPERATION = 0x01
    JOB = 0x02
    END = 0x03
    PRINTER = 0x04
    UNSUPPORTED = 0x05
    SUBSCRIPTION = 0x06
    EVENT_NOTIFICATION = 0x07
    RESOURCE = 0x08
    DOCUMENT = 0x09
    SYSTEM = 0x0A


class ValueTag(IntEnum):
    """Attribute value syntax tags."""

    UNSUPPORTED_VALUE = 0x10
    DEFAULT = 0x11
    UNKNOWN = 0x12
    NOVALUE = 0x13
    INTEGER = 0x21
    BOOLEAN = 0x22
    ENUM = 0x23
    STRING = 0x30
    DATE = 0x31
    RESOLUTION = 0x32
    RANGE = 0x33
    BEGIN_COLLECTION = 0x34
    TEXTLANG = 0x35
    NAMELANG = 0x36
    TEXT = 0x41
    NAME = 0x42
    KEYWORD = 0x44
    URI = 0x45
    URISCHEME = 0x46
    CHARSET = 0x47
    LANGUAGE = 0x48
    MIMETYPE = 0x49


class ResolutionUnits(IntEnum):
    """Units for resolution values."""

    PER_INCH = 3
    PER_CM = 4


# Protocol integers are signed 32-bit values
INTEGER_MIN = -(2**31)
INTEGER_MAX = 2**31 - 1


@dataclass(frozen=True)
class Resolution:
    """A cross-feed/feed resolution pair."""

    xres: int
    yres: int
    units: ResolutionUnits = ResolutionUnits.PER_INCH


@dataclass
class Attribute:
    """A named, typed, possibly multi-valued attribute."""

    name: str
    group: GroupTag
    value_tag: ValueTag
    values: list[Any] = field(default_factory=list)

    @property
    def value(self) -> Any:
        """First value of the attribute (None if it has no values)."""
        return self.values[0] if self.values else None

    def __len__(self) -> int:
        return len(self.values)


class IppMessage:
    """Ordered, grouped attribute container.

    Used for requests and responses (with an operation) and for collection
    values (without one, members in ``GroupTag.ZERO``). Attribute names are
    unique within a group: adding a name that already exists in the group
    replaces the previous attribute.
    """

    def __init__(self, operation: Operation | None = None, request_id: int = 1):
        """Create an empty message.

        Args:
            operation: Operation code for requests (None for collections).
            request_id: Request identifier.
        """
        self.operation = operation
        self.request_id = request_id
        self._groups: dict[GroupTag, dict[str, Attribute]] = {}

    def __repr__(self) -> str:
        op = self.operation.name if self.operation is not None else "collection"
        return f"<IppMessage {op} attributes={len(self)}>"

    def __len__(self) -> int:
        return sum(len(attrs) for attrs in self._groups.values())

    def __iter__(self) -> Iterator[Attribute]:
        return self.attributes()

    def __contains__(self, name: object) -> bool:
        return any(name in attrs for attrs in self._groups.values())

    # ------------------------------------------------------------------
    # Adding attributes
    # ------------------------------------------------------------------

    def add(self, group: GroupTag, value_tag: ValueTag, name: str, *values: Any) -> Attribute:
        """Add an attribute, replacing any attribute of the same name in the group.

        Args:
            group: Group to add the attribute to.
            value_tag: Value syntax.
            name: Attribute name.
            *values: One or more values.

        Returns:
            Attribute: The new attribute.

        Raises:
            ValueError: If no values are given.
        """
        if not values:
            raise ValueError(f"Attribute '{name}' needs at least one value")

        attr = Attribute(name=name, group=group, value_tag=value_tag, values=list(values))
        self._groups.setdefault(group, {})[name] = attr
        return attr

    def add_string(
        self, group: GroupTag, value_tag: ValueTag, name: str, value: str
    ) -> Attribute:
        """Add a single string-valued attribute (keyword, text, URI, ...)."""
        return self.add(group, value_tag, name, value)

    def add_strings(
        self, group: GroupTag, value_tag: ValueTag, name: str, values: list[str]
    ) -> Attribute:
        """Add a multi-valued string attribute."""
        return self.add(group, value_tag, name, *values)

    def add_integer(
        self, group: GroupTag, value_tag: ValueTag, name: str, value: int
    ) -> Attribute:
        """Add an integer or enum attribute."""
        return self.add(group, value_tag, name, int(value))

    def add_boolean(self, group: GroupTag, name: str, value: bool) -> Attribute:
        """Add a boolean attribute."""
        return self.add(group, ValueTag.BOOLEAN, name, bool(value))

    def add_resolution(
        self,
        group: GroupTag,
        name: str,
        units: ResolutionUnits,
        xres: int,
        yres: int,
    ) -> Attribute:
        """Add a resolution attribute."""
        return self.add(group, ValueTag.RESOLUTION, name, Resolution(xres, yres, units))

    def add_collection(self, group: GroupTag, name: str, value: "IppMessage") -> Attribute:
        """Add a collection attribute."""
        return self.add(group, ValueTag.BEGIN_COLLECTION, name, value)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def attributes(self, group: GroupTag | None = None) -> Iterator[Attribute]:
        """Iterate attributes, optionally restricted to one group."""
        if group is not None:
            yield from list(self._groups.get(group, {}).values())
            return

        for attrs in list(self._groups.values()):
            yield from list(attrs.values())

    def groups(self) -> list[GroupTag]:
        """Groups present in the message, in insertion order."""
        return list(self._groups)

    def find(self, name: str, value_tag: ValueTag | None = None) -> Attribute | None:
        """Find the first attribute with a name.

        Args:
            name: Attribute name.
            value_tag: Only match attributes with this syntax (None = any).

        Returns:
            Attribute | None: The attribute or None.
        """
        for attrs in self._groups.values():
            attr = attrs.get(name)
            if attr is not None and (value_tag is None or attr.value_tag == value_tag):
                return attr
        return None

    def list_names(self, name: str) -> list[str]:
        """Get the keyword values of an attribute.

        Args:
            name: Attribute name (e.g. 'job-creation-attributes-supported').

        Returns:
            list[str]: Keyword values, or an empty list if absent.
        """
        attr = self.find(name, ValueTag.KEYWORD)
        return list(attr.values) if attr else []

    def find_by_name(self, name: str) -> ValueTag | None:
        """Get the value syntax of an attribute.

        Args:
            name: Attribute name.

        Returns:
            ValueTag | None: The attribute's value tag or None if absent.
        """
        attr = self.find(name)
        return attr.value_tag if attr else None

    def as_dict(self) -> dict[str, Any]:
        """Plain-Python view of the attributes.

        Single values are unwrapped, collections become nested dicts.
        Names present in several groups keep the last one seen.

        Returns:
            dict: Attribute name to value(s).
        """
        result: dict[str, Any] = {}
        for attr in self.attributes():
            values = [v.as_dict() if isinstance(v, IppMessage) else v for v in attr.values]
            result[attr.name] = values[0] if len(values) == 1 else values
        return result


# Registered enum keywords (PWG 5100.x / RFC 8011)
_ENUMS: dict[str, dict[str, int]] = {
    "orientation-requested": {
        "portrait": 3,
        "landscape": 4,
        "reverse-landscape": 5,
        "reverse-portrait": 6,
        "none": 7,
    },
    "print-quality": {
        "draft": 3,
        "normal": 4,
        "high": 5,
    },
    "finishings": {
        "none": 3,
        "staple": 4,
        "punch": 5,
        "cover": 6,
        "bind": 7,
        "saddle-stitch": 8,
        "edge-stitch": 9,
        "fold": 10,
        "trim": 11,
        "bale": 12,
        "booklet-maker": 13,
        "jog-offset": 14,
        "coat": 15,
        "laminate": 16,
    },
}


def enum_value(attribute_name: str, keyword: str) -> int:
    """Look up the integer value of an enum keyword.

    Args:
        attribute_name: Enum attribute name (e.g. 'orientation-requested').
        keyword: Symbolic value (e.g. 'landscape').

    Returns:
        int: Enum value, or 0 if the keyword is not known.
    """
    return _ENUMS.get(attribute_name, {}).get(keyword, 0)


def new_request(operation: Operation, request_id: int = 1, language: str = "en") -> IppMessage:
    """Create a request with the required charset and language attributes.

    Args:
        operation: Operation code.
        request_id: Request identifier.
        language: Natural language for text values.

    Returns:
        IppMessage: The new request.
    """
    request = IppMessage(operation, request_id)
    request.add_string(GroupTag.OPERATION, ValueTag.CHARSET, "attributes-charset", "utf-8")
    request.add_string(
        GroupTag.OPERATION, ValueTag.LANGUAGE, "attributes-natural-language", language
    )
    return request
