"""Data models for a single dispatch cycle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class FunctionCallRequest:
    """A function call extracted from a model response."""

    name: str
    arguments: Dict[str, Any]
    call_id: Optional[str] = None


@dataclass(frozen=True)
class FunctionResult:
    """The outcome of invoking a handler for one function call.

    Exactly one of ``value`` and ``error`` is meaningful; ``error`` is set on failure.
    """

    name: str
    value: Any = None
    error: Optional[str] = None
    call_id: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def response(self) -> Dict[str, Any]:
        """Payload of the function-response part sent back to the model."""
        if self.error is not None:
            return {"error": self.error}
        if isinstance(self.value, dict):
            return self.value
        return {"result": self.value}
