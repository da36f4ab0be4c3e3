# src/llm/shapes.py — v1
"""Output-shape declarations.

Each shape is declared once and yields both the JSON schema sent to the
provider (``response_format``) and the local post-parse check, so the
two can never disagree on field names or cardinality.

Checks return None on success or a human-readable violation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class OutputShape(ABC):
    """Declarative structure expected back from the provider."""

    name: str

    @abstractmethod
    def json_schema(self) -> dict[str, Any]:
        """JSON schema embedded in the request."""

    @abstractmethod
    def check_structure(self, value: Any) -> str | None:
        """Field presence and types, without cardinality."""

    def check_count(self, value: Any) -> str | None:
        """Cardinality check. Shapes without arrays always pass."""
        return None

    def check(self, value: Any) -> str | None:
        """Full check: structure first, then cardinality."""
        return self.check_structure(value) or self.check_count(value)

    def response_format(self) -> dict[str, Any]:
        return {
            "type": "json_schema",
            "json_schema": {"name": self.name, "schema": self.json_schema()},
        }


def _object_schema(properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": required,
        "additionalProperties": False,
    }


@dataclass(frozen=True)
class _ArrayShape(OutputShape):
    name: str
    field: str
    count: int

    @abstractmethod
    def _items_schema(self) -> dict[str, Any]:
        """Schema of one array item."""

    @abstractmethod
    def _check_item(self, index: int, item: Any) -> str | None:
        """Violation for one item, or None."""

    def json_schema(self) -> dict[str, Any]:
        array = {
            "type": "array",
            "minItems": self.count,
            "maxItems": self.count,
            "items": self._items_schema(),
        }
        return _object_schema({self.field: array}, [self.field])

    def check_structure(self, value: Any) -> str | None:
        if not isinstance(value, dict):
            return "expected a JSON object"
        items = value.get(self.field)
        if not isinstance(items, list):
            return f"field {self.field!r} must be an array"
        for index, item in enumerate(items):
            violation = self._check_item(index, item)
            if violation:
                return violation
        return None

    def check_count(self, value: Any) -> str | None:
        items = value[self.field]
        if len(items) != self.count:
            return (
                f"expected {self.count} items in {self.field!r}, got {len(items)}"
            )
        return None


@dataclass(frozen=True)
class StringArrayShape(_ArrayShape):
    """``{field: [str] * count}``"""

    item_description: str = ""

    def _items_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "string"}
        if self.item_description:
            schema["description"] = self.item_description
        return schema

    def _check_item(self, index: int, item: Any) -> str | None:
        if not isinstance(item, str):
            return f"item {index} of {self.field!r} must be a string"
        return None


@dataclass(frozen=True)
class ObjectArrayShape(_ArrayShape):
    """``{field: [{f1: str, f2: str, ...}] * count}``"""

    item_fields: tuple[str, ...] = ()

    def _items_schema(self) -> dict[str, Any]:
        return _object_schema(
            {name: {"type": "string"} for name in self.item_fields},
            list(self.item_fields),
        )

    def _check_item(self, index: int, item: Any) -> str | None:
        if not isinstance(item, dict):
            return f"item {index} of {self.field!r} must be an object"
        for name in self.item_fields:
            if not isinstance(item.get(name), str):
                return f"item {index} of {self.field!r} is missing string field {name!r}"
        return None


@dataclass(frozen=True)
class PromptObjectShape(OutputShape):
    """``{field: non-empty str, optional_field?: str}``"""

    name: str
    field: str = "prompt"
    optional_field: str | None = None
    description: str = ""
    optional_description: str = ""

    def json_schema(self) -> dict[str, Any]:
        required: dict[str, Any] = {"type": "string"}
        if self.description:
            required["description"] = self.description
        properties = {self.field: required}
        if self.optional_field:
            optional: dict[str, Any] = {"type": "string"}
            if self.optional_description:
                optional["description"] = self.optional_description
            properties[self.optional_field] = optional
        return _object_schema(properties, [self.field])

    def check_structure(self, value: Any) -> str | None:
        if not isinstance(value, dict):
            return "expected a JSON object"
        text = value.get(self.field)
        if not isinstance(text, str) or not text.strip():
            return f"field {self.field!r} must be a non-empty string"
        return None
