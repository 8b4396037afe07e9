"""Conformance checker."""

from check.checker import check

__all__ = ["check"]
