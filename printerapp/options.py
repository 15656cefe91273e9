"""Option store for ``name=value`` print options."""

import shlex
from collections.abc import Iterable, Iterator, Mapping


class Options(Mapping):
    """Ordered collection of case-sensitive ``name=value`` options.

    Adding an option that already exists replaces its value, so the last
    value given for a name wins.
    """

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values: dict[str, str] = {}
        if values:
            for name, value in values.items():
                self.add(name, value)

    def __repr__(self) -> str:
        return f"Options({self._values!r})"

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def add(self, name: str, value: str) -> None:
        """Set an option, replacing any previous value.

        Args:
            name: Option name.
            value: Option value.

        Raises:
            ValueError: If the name is empty.
        """
        if not name:
            raise ValueError("Option name must not be empty")
        self._values[name] = str(value)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Get an option value.

        Args:
            name: Option name.
            default: Value returned when the option is not set.

        Returns:
            str | None: Option value or default.
        """
        return self._values.get(name, default)

    def remove(self, name: str) -> bool:
        """Remove an option.

        Returns:
            bool: True if the option was set.
        """
        return self._values.pop(name, None) is not None

    @classmethod
    def parse(cls, text: str, options: "Options | None" = None) -> "Options":
        """Parse a command-line style option string.

        Values may be quoted with shell rules. A bare ``name`` means
        ``name=true`` and a bare ``noname`` means ``name=false``.

        Args:
            text: Option string, e.g. ``"copies=2 media='na_letter_8.5x11in' nocollate"``.
            options: Existing options to add to (a new store if None).

        Returns:
            Options: The updated option store.

        Raises:
            ValueError: If quoting is unbalanced.
        """
        result = options if options is not None else cls()

        for token in shlex.split(text):
            name, sep, value = token.partition("=")
            if not name:
                continue
            if sep:
                result.add(name, value)
            elif name.lower().startswith("no") and len(name) > 2:
                result.add(name[2:], "false")
            else:
                result.add(name, "true")

        return result

    @classmethod
    def from_args(cls, args: Iterable[str]) -> "Options":
        """Merge several option strings, e.g. the values of repeated ``-o`` flags.

        Args:
            args: Option strings, applied in order.

        Returns:
            Options: Combined option store.
        """
        result = cls()
        for arg in args:
            cls.parse(arg, result)
        return result
