"""Function registry."""

from .base import HandlerRegistry

__all__ = ["HandlerRegistry"]
