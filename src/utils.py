"""Shared utilities for layercheck."""

from __future__ import annotations

from pathlib import Path


def path_to_module(file_path: str | Path) -> str:
    """Convert a file path to a Python module name.

    Args:
        file_path: Relative file path (e.g., "src/shop/orders.py" or Path object)

    Returns:
        Module name (e.g., "shop.orders")

    Examples:
        >>> path_to_module("src/shop/orders.py")
        'shop.orders'
        >>> path_to_module("src/shop/__init__.py")
        'shop'
        >>> path_to_module(Path("foo/bar.py"))
        'foo.bar'
    """
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    normalized_parts = [part for part in path_str.replace("\\", "/").split("/") if part]

    # Sources under src/<package>/... map to <package>.<submodules>, matching
    # how they are imported once installed.
    module_parts = (
        normalized_parts[1:]
        if len(normalized_parts) >= 2 and normalized_parts[0] == "src"
        else normalized_parts
    )

    if module_parts and module_parts[-1].endswith(".py"):
        module_parts[-1] = module_parts[-1][:-3]

    if module_parts and module_parts[-1] == "__init__":
        module_parts = module_parts[:-1]

    return ".".join(module_parts)


def is_package_init(file_path: str | Path) -> bool:
    return Path(file_path).name == "__init__.py"
