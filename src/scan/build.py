"""Build a module graph from a Python source tree."""

from __future__ import annotations

import logging
from fnmatch import fnmatch
from typing import TYPE_CHECKING

from errors import ModuleNameCollisionError
from graph.model import Layer, ModuleGraph
from parse.ast_imports import extract_imported_modules
from scan.files import find_python_files
from utils import is_package_init, path_to_module

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import LayerCheckConfig, LayerDef, ScanConfig

logger = logging.getLogger(__name__)


def classify_layer(path: str, layer_defs: list[LayerDef]) -> Layer | None:
    """Classify a file path into an architectural layer.

    Uses first-match-wins semantics: the first layer definition whose
    glob patterns match the path determines the layer.
    """
    for layer_def in layer_defs:
        for glob_pattern in layer_def.globs:
            if fnmatch(path, glob_pattern):
                return layer_def.name
    return None


def resolve_internal_module(name: str, known_modules: set[str]) -> str | None:
    """Map an imported name to the longest known module it refers to.

    ``pkg.mod.func`` resolves to ``pkg.mod`` when that module was scanned.
    Names outside the scanned tree resolve to None.
    """
    parts = name.split(".")
    while parts:
        candidate = ".".join(parts)
        if candidate in known_modules:
            return candidate
        parts.pop()
    return None


def build_graph_from_source(
    root: Path,
    scan_config: ScanConfig,
    graph: ModuleGraph | None = None,
) -> ModuleGraph:
    """Populate a module graph with the Python modules found under ``root``.

    Each file becomes a module tagged with its layer; each import of another
    scanned module becomes a dependency edge. Imports of third-party or
    standard-library modules are ignored, as are self-imports.

    Args:
        root: Directory to scan
        scan_config: File filters and layer globs
        graph: Optional graph to add to (e.g., one already holding manifest
            modules); a new graph is created when omitted

    Returns:
        The populated graph.
    """
    if graph is None:
        graph = ModuleGraph()

    files: dict[str, tuple[Path, bool]] = {}
    for file_path in find_python_files(
        root,
        include_patterns=scan_config.include,
        exclude_patterns=scan_config.exclude,
        nested_gitignore=scan_config.nested_gitignore,
    ):
        relative_path = file_path.relative_to(root).as_posix()
        module_name = path_to_module(relative_path)
        if not module_name:
            continue

        layer = classify_layer(relative_path, scan_config.layer)
        if layer is None:
            if scan_config.unclassified == "skip":
                logger.debug("Skipping unclassified file %s", relative_path)
                continue
            layer = Layer.UNCLASSIFIED

        if module_name in files:
            raise ModuleNameCollisionError(
                module_name,
                files[module_name][0].relative_to(root).as_posix(),
                relative_path,
            )
        graph.add_module(module_name, layer)
        files[module_name] = (file_path, is_package_init(relative_path))

    known_modules = set(graph.modules())
    for module_name in sorted(files):
        file_path, is_package = files[module_name]
        for imported in extract_imported_modules(
            file_path, module_name, is_package=is_package
        ):
            target = resolve_internal_module(imported, known_modules)
            if target is None or target == module_name:
                continue
            graph.add_dependency(module_name, target)

    logger.debug(
        "Scanned %d files under %s: %d modules, %d edges",
        len(files),
        root,
        graph.module_count,
        graph.edge_count,
    )
    return graph


def build_graph(root: Path, config: LayerCheckConfig) -> ModuleGraph:
    """Build the graph described by a configuration.

    Declared modules are added first, then the source tree is scanned when a
    [scan] section is present, and declared dependencies are added last so
    they may reference scanned modules.
    """
    graph = ModuleGraph()
    for module in config.modules:
        graph.add_module(module.name, module.layer)

    if config.scan is not None:
        build_graph_from_source(root, config.scan, graph)

    for dependency in config.dependencies:
        graph.add_dependency(dependency.from_module, dependency.to_module)

    return graph


__all__ = [
    "build_graph",
    "build_graph_from_source",
    "classify_layer",
    "resolve_internal_module",
]
