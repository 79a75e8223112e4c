"""Host environment seen by the analytics facade.

The facade never reads files or settings itself.  Everything it needs,
screen names, event categories and the tracker configuration, is looked
up by integer resource id through an :class:`ApplicationContext`.

:class:`ResourceContext` is a ready-made implementation backed by a plain
mapping, for hosts that do not bring their own resource system::

    ctx = ResourceContext(
        "com.example.shop",
        {
            "string": {"screen_home": "Home", "screen_product": "Product %s"},
            "xml": {"global_tracker": {"tracking_id": "UA-000000-1"}},
        },
    )
    ctx.get_string(ctx.id_of("screen_product"), "42")  # "Product 42"
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import (
    Any,
    Dict,
    Mapping,
    Protocol,
    Sequence,
    Tuple,
    Union,
    runtime_checkable,
)

NOT_FOUND = 0

# First id handed out by ResourceContext; keeps every id non-zero.
FIRST_RESOURCE_ID = 0x7F010001

# Java Formatter specifier: %[index$][flags][width][.precision]conversion
_SPECIFIER = re.compile(r"%(?:(\d+)\$)?([-#+ 0,(]*)(\d*(?:\.\d+)?)([a-zA-Z%])")

# Conversions Python's % operator understands as-is.
_PY_CONVERSIONS = set("sdioxXeEfFgGc")


def _format_one(arg: Any, flags: str, width: str, conversion: str) -> str:
    if conversion == "S":
        return _format_one(arg, flags, width, "s").upper()
    if conversion in ("b", "B"):
        text = "false" if arg is None or arg is False else "true"
        return text.upper() if conversion == "B" else text
    if conversion not in _PY_CONVERSIONS:
        return str(arg)
    spec = "%" + flags.replace(",", "").replace("(", "") + width + conversion
    try:
        return spec % (arg,)
    except (TypeError, ValueError):
        return str(arg)


def format_resource(template: str, args: Sequence[Any]) -> str:
    """Format ``template`` the way Android string resources are formatted.

    Supports ``%s``-style and positional ``%1$s`` specifiers, ``%%`` and
    ``%n``.  Surplus arguments are ignored; a specifier without a matching
    argument is left in place.
    """
    ordinary = 0

    def substitute(match: re.Match) -> str:
        nonlocal ordinary
        index, flags, width, conversion = match.groups()
        if conversion == "%":
            return "%"
        if conversion == "n":
            return "\n"
        if index:
            position = int(index) - 1
        else:
            position = ordinary
            ordinary += 1
        if not 0 <= position < len(args):
            return match.group(0)
        return _format_one(args[position], flags, width, conversion)

    return _SPECIFIER.sub(substitute, template)


class ResourceNotFoundError(LookupError):
    """Raised when a resource id does not name a resource of the expected type."""

    def __init__(self, resource_id: Union[int, str], resource_type: str = "string"):
        super().__init__(f"No {resource_type} resource for id {resource_id!r}")
        self.resource_id = resource_id
        self.resource_type = resource_type


@runtime_checkable
class ApplicationContext(Protocol):
    """Capabilities the facade consumes from its host."""

    def get_application_context(self) -> ApplicationContext:
        """Return the long-lived, application-scoped context."""
        ...

    def get_package_name(self) -> str: ...

    def get_identifier(self, name: str, resource_type: str, package: str) -> int:
        """Return the id of a named resource, or 0 when it does not exist."""
        ...

    def get_string(self, resource_id: int, *format_args: Any) -> str:
        """Return a string resource, formatted when args are given."""
        ...


class ResourceContext:
    """Mapping-backed :class:`ApplicationContext`.

    ``resources`` maps a resource type (``"string"``, ``"xml"``, ...) to a
    mapping of resource names to values.  Ids are assigned in declaration
    order and stay stable for the lifetime of the instance.
    """

    def __init__(
        self,
        package_name: str,
        resources: Mapping[str, Mapping[str, Any]],
    ):
        self.package_name = package_name
        self._ids: Dict[Tuple[str, str], int] = {}
        self._entries: Dict[int, Tuple[str, str, Any]] = {}

        next_id = FIRST_RESOURCE_ID
        for resource_type, entries in resources.items():
            for name, value in entries.items():
                self._ids[(resource_type, name)] = next_id
                self._entries[next_id] = (resource_type, name, value)
                next_id += 1

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> ResourceContext:
        """Load ``{"package": ..., "resources": {...}}`` from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(data["package"], data.get("resources", {}))

    # -- ApplicationContext --

    def get_application_context(self) -> ResourceContext:
        return self

    def get_package_name(self) -> str:
        return self.package_name

    def get_identifier(self, name: str, resource_type: str, package: str) -> int:
        if package != self.package_name:
            return NOT_FOUND
        return self._ids.get((resource_type, name), NOT_FOUND)

    def get_string(self, resource_id: int, *format_args: Any) -> str:
        entry = self._entries.get(resource_id)
        if entry is None or entry[0] != "string":
            raise ResourceNotFoundError(resource_id)
        template = str(entry[2])
        if not format_args:
            return template
        return format_resource(template, format_args)

    # -- extras --

    def get_value(self, resource_id: int) -> Any:
        """Return the raw value of any resource type."""
        entry = self._entries.get(resource_id)
        if entry is None:
            raise ResourceNotFoundError(resource_id, "any")
        return entry[2]

    def id_of(self, name: str, resource_type: str = "string") -> int:
        """Return the id of ``name``; raise if it is not declared."""
        resource_id = self.get_identifier(name, resource_type, self.package_name)
        if resource_id == NOT_FOUND:
            raise ResourceNotFoundError(name, resource_type)
        return resource_id
