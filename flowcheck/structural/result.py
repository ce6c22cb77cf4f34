# flowcheck/structural/result.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Scope(str, Enum):
    PARSE = "parse"
    DOCUMENT = "document"
    NODE = "node"
    EDGE = "edge"
    CONTRACT = "contract"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ValidationError:
    """One problem found in a workflow document. `message` is shown verbatim."""

    scope: Scope
    message: str
    index: Optional[int] = None
    node_id: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scope": self.scope.value,
            "index": self.index,
            "node_id": self.node_id,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    valid: bool
    errors: List[ValidationError] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[ValidationError]) -> "ValidationResult":
        return cls(valid=not errors, errors=list(errors))

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self.errors]

    def by_scope(self, scope: Scope) -> List[ValidationError]:
        return [e for e in self.errors if e.scope == scope]

    def to_dict(self) -> Dict[str, Any]:
        """Presentation form: {"valid": bool, "errors": [message, ...]}."""
        return {"valid": self.valid, "errors": self.messages}
