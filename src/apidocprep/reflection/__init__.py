"""Reflection information documents."""

from .reflection_document import ReflectionDocument

__all__ = ["ReflectionDocument"]
