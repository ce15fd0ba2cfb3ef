"""Build context, presentation style settings and progress reporting.

This module provides the narrow build-process interfaces used by the substitution
tag and conceptual content steps: folder resolution, property lookup, and progress
and warning reporting.
"""
