"""Interface model consumed by the proxy generator."""

from dataclasses import dataclass, field
from enum import StrEnum

from dataclasses_json import DataClassJsonMixin


class ArgDirection(StrEnum):
    IN = "in"
    OUT = "out"


class PropertyAccess(StrEnum):
    READ = "read"
    WRITE = "write"
    READWRITE = "readwrite"

    @property
    def read(self) -> bool:
        return self in (PropertyAccess.READ, PropertyAccess.READWRITE)

    @property
    def write(self) -> bool:
        return self in (PropertyAccess.WRITE, PropertyAccess.READWRITE)


@dataclass(frozen=True)
class Arg(DataClassJsonMixin):
    """Represents a method or signal argument.

    `direction` is None when the introspection data leaves it out; method
    arguments then default to input.
    """

    type: str
    name: str | None = None
    direction: ArgDirection | None = None

    @property
    def is_input(self) -> bool:
        return self.direction != ArgDirection.OUT


@dataclass(frozen=True)
class Method(DataClassJsonMixin):
    name: str
    args: list[Arg] = field(default_factory=list)


@dataclass(frozen=True)
class Signal(DataClassJsonMixin):
    name: str
    args: list[Arg] = field(default_factory=list)


@dataclass(frozen=True)
class Property(DataClassJsonMixin):
    """Represents an interface property."""

    name: str
    type: str
    access: PropertyAccess

    @property
    def readable(self) -> bool:
        return self.access.read

    @property
    def writable(self) -> bool:
        return self.access.write


@dataclass(frozen=True)
class Interface(DataClassJsonMixin):
    """Represents one D-Bus interface from introspection data."""

    name: str
    methods: list[Method] = field(default_factory=list)
    signals: list[Signal] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)

    @property
    def short_name(self) -> str:
        """Last dotted component of the interface name."""
        return self.name.rsplit(".", 1)[-1]


STANDARD_INTERFACES = frozenset(
    [
        "org.freedesktop.DBus.Introspectable",
        "org.freedesktop.DBus.Peer",
        "org.freedesktop.DBus.Properties",
    ]
)


def is_standard(interface: Interface) -> bool:
    """Check if zbus already provides a proxy for this interface."""
    return interface.name in STANDARD_INTERFACES
