"""Function call dispatch and the resubmission loop."""

from .dispatcher import FunctionCallDispatcher, DispatchOutcome, Final, NeedsResubmission
from .loop import FunctionCallingLoop, ContentGenerator

__all__ = [
    "FunctionCallDispatcher",
    "DispatchOutcome",
    "Final",
    "NeedsResubmission",
    "FunctionCallingLoop",
    "ContentGenerator",
]
