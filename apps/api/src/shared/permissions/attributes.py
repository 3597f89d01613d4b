"""
Field redaction rules attached to grants.

Grants carry their rule as a list of attribute names:

    ["*"]                      every field
    ["*", "!purchasePrice"]    every field except purchasePrice
    ["id", "name"]             only id and name

The list is parsed into one of three rule types so the redaction semantics
live in one place.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Union

WILDCARD = "*"
EXCLUDE_PREFIX = "!"


@dataclass(frozen=True)
class AllowAll:
    def apply(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return dict(data)

    def to_list(self) -> list[str]:
        return [WILDCARD]


@dataclass(frozen=True)
class AllowAllExcept:
    fields: tuple[str, ...]

    def apply(self, data: Mapping[str, Any]) -> dict[str, Any]:
        excluded = set(self.fields)
        return {key: value for key, value in data.items() if key not in excluded}

    def to_list(self) -> list[str]:
        return [WILDCARD] + [f"{EXCLUDE_PREFIX}{field}" for field in self.fields]


@dataclass(frozen=True)
class AllowOnly:
    fields: tuple[str, ...]

    def apply(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {field: data[field] for field in self.fields if field in data}

    def to_list(self) -> list[str]:
        return list(self.fields)


AttributeRule = Union[AllowAll, AllowAllExcept, AllowOnly]


def parse_attribute_rule(attributes: list[str]) -> AttributeRule:
    """
    Convert an attribute list into its rule.

    Args:
        attributes: Attribute names, optionally with "*" and "!field" entries

    Returns:
        The matching AttributeRule
    """
    if WILDCARD in attributes:
        excluded = tuple(
            dict.fromkeys(
                attr[len(EXCLUDE_PREFIX) :]
                for attr in attributes
                if isinstance(attr, str) and attr.startswith(EXCLUDE_PREFIX)
            )
        )
        return AllowAllExcept(excluded) if excluded else AllowAll()

    return AllowOnly(tuple(dict.fromkeys(attributes)))


def filter_attributes(
    data: Mapping[str, Any], attributes: list[str]
) -> dict[str, Any]:
    """
    Redact ``data`` down to the fields ``attributes`` allows.

    Never mutates ``data``; always returns a new dict. Requested fields
    missing from ``data`` are silently omitted.
    """
    return parse_attribute_rule(list(attributes)).apply(data)
