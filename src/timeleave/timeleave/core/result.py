from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, TypeVar

from .enums import RejectionKind

T = TypeVar("T")


@dataclass(frozen=True)
class Rejection:
    """A business-rule violation the caller must resolve by changing input."""

    kind: RejectionKind
    message: str
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of an engine operation: either a value or a rejection."""

    value: T | None = None
    rejection: Rejection | None = None

    @property
    def ok(self) -> bool:
        return self.rejection is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def rejected(cls, kind: RejectionKind, message: str, **context: Any) -> "Outcome[T]":
        return cls(rejection=Rejection(kind=kind, message=message, context=context))
