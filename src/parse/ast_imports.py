"""AST-based import extraction for the source scanner."""

from __future__ import annotations

import ast
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def resolve_relative_import(
    importing_module: str,
    relative_module: str,
    level: int,
    *,
    is_package: bool = False,
) -> str:
    """Resolve a relative import to an absolute module name.

    Args:
        importing_module: The module doing the import (e.g., "pkg.sub.mod")
        relative_module: The relative module name (e.g., "foo" from ".foo")
        level: Number of dots (1 for ".", 2 for "..", etc.)
        is_package: True when the importer is a package ``__init__``, whose
            own name is the anchor for a single dot

    Returns:
        Absolute module name (e.g., "pkg.sub.foo")

    Examples:
        >>> resolve_relative_import("pkg.sub.mod", "foo", 1)
        'pkg.sub.foo'
        >>> resolve_relative_import("pkg.sub.mod", "", 1)
        'pkg.sub'
        >>> resolve_relative_import("pkg.sub.mod", "bar", 2)
        'pkg.bar'
        >>> resolve_relative_import("pkg.sub", "mod", 1, is_package=True)
        'pkg.sub.mod'
    """
    parts = importing_module.split(".") if importing_module else []
    if is_package:
        level -= 1

    if level > len(parts):
        return relative_module or importing_module

    base_parts = parts[: len(parts) - level]

    if relative_module:
        return ".".join([*base_parts, relative_module])
    if base_parts:
        return ".".join(base_parts)
    return importing_module


def extract_imported_modules(
    file_path: Path,
    importing_module: str,
    *,
    is_package: bool = False,
) -> list[str]:
    """Return the absolute names of every module a Python file imports.

    ``from x import y`` contributes both ``x`` and ``x.y`` so that importing a
    submodule by name is visible; callers discard names that are not modules.
    Files with invalid syntax or encoding contribute no imports.
    """
    try:
        with file_path.open(encoding="utf-8") as file:
            tree = ast.parse(file.read(), str(file_path))
    except (SyntaxError, UnicodeDecodeError) as exc:
        logger.debug("Skipping imports of %s: %s", file_path, exc)
        return []

    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            base = node.module or ""
            if node.level > 0:
                base = resolve_relative_import(
                    importing_module, base, node.level, is_package=is_package
                )
            if base:
                modules.add(base)
            for alias in node.names:
                if alias.name != "*":
                    modules.add(f"{base}.{alias.name}" if base else alias.name)

    return sorted(modules)


__all__ = ["extract_imported_modules", "resolve_relative_import"]
