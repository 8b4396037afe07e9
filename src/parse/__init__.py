"""Parsing utilities for the source scanner."""

from parse.ast_imports import extract_imported_modules, resolve_relative_import

__all__ = [
    "extract_imported_modules",
    "resolve_relative_import",
]
