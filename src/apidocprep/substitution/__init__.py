"""Substitution tag replacement for build template files."""

from .substitution_tags import SubstitutionTagReplacement

__all__ = ["SubstitutionTagReplacement"]
