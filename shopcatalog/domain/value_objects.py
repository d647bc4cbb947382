"""Value Objects for the domain layer.

A collection's filter chain is stored as plain configuration: an
ordered list of filter definitions, each a filter code plus typed,
string-encoded arguments. Decoding happens when the filter runs.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Self

from shopcatalog.domain.base import ValueObject


class ConfigArgType(str, Enum):
    """Types a collection filter argument can declare."""

    FACET_VALUE_IDS = "facet_value_ids"
    STRING = "string"
    BOOLEAN = "boolean"
    INT = "int"


@dataclass(frozen=True)
class FilterArgument(ValueObject):
    """A single named filter argument.

    Values are kept in their wire encoding (facet value id lists are
    JSON arrays, booleans are ``"true"``/``"false"``) so that a stored
    filter chain round-trips unchanged through the write path.

    Attributes:
        name: Parameter name declared by the filter.
        type: Declared argument type.
        value: Encoded argument value.
    """

    name: str
    type: ConfigArgType
    value: str

    @classmethod
    def facet_value_ids(cls, name: str, ids: Iterable[str]) -> Self:
        """Create an id-list argument.

        Args:
            name: Parameter name.
            ids: Facet value ids.

        Returns:
            FilterArgument with a JSON array value.
        """
        return cls(name=name, type=ConfigArgType.FACET_VALUE_IDS, value=json.dumps(list(ids)))

    @classmethod
    def string(cls, name: str, value: str) -> Self:
        """Create a string argument."""
        return cls(name=name, type=ConfigArgType.STRING, value=value)

    @classmethod
    def boolean(cls, name: str, value: bool) -> Self:
        """Create a boolean argument."""
        return cls(name=name, type=ConfigArgType.BOOLEAN, value="true" if value else "false")


@dataclass(frozen=True)
class FilterDefinition(ValueObject):
    """One step of a collection's filter chain.

    Attributes:
        code: Registered collection filter code.
        arguments: Ordered filter arguments.
    """

    code: str
    arguments: tuple[FilterArgument, ...] = ()

    def __str__(self) -> str:
        """Return string representation.

        Returns:
            Filter code with argument names.
        """
        names = ", ".join(arg.name for arg in self.arguments)
        return f"{self.code}({names})"
