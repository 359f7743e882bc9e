"""Metadata filter expressed as a conjunction of simple conditions."""
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Condition:
    field: str
    op: str  # "eq" | "ne"
    value: Any

    def matches(self, metadata: dict) -> bool:
        actual = metadata.get(self.field)
        if self.op == "eq":
            return actual == self.value
        if self.op == "ne":
            return actual != self.value
        raise ValueError(f"Unsupported filter op: {self.op}")


@dataclass(frozen=True)
class MetadataFilter:
    """All conditions must hold."""
    conditions: tuple[Condition, ...] = field(default_factory=tuple)

    def eq(self, name: str, value: Any) -> "MetadataFilter":
        return MetadataFilter(self.conditions + (Condition(name, "eq", value),))

    def ne(self, name: str, value: Any) -> "MetadataFilter":
        return MetadataFilter(self.conditions + (Condition(name, "ne", value),))

    def matches(self, metadata: dict) -> bool:
        return all(c.matches(metadata) for c in self.conditions)

    def __bool__(self) -> bool:
        return bool(self.conditions)
