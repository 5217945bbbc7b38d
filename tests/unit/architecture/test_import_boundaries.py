"""Tests for architecture import boundaries.

These tests ensure that the layering of the package is maintained:
- The engine core (transformations, rules, comparisons) does not import
  mapping, infrastructure or CLI code
- Only the CLI imports the CLI
"""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

PACKAGE_NAME = "data_import_utility"

# Root of the data_import_utility package
PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent / PACKAGE_NAME

CORE_PACKAGES = ("transformations", "rules", "comparisons")


def get_python_files(directory: Path) -> list[Path]:
    return sorted(directory.rglob("*.py"))


def module_name(file_path: Path) -> str:
    parts = list(file_path.relative_to(PACKAGE_ROOT.parent).with_suffix("").parts)
    if parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def extract_imports_from_file(file_path: Path) -> list[str]:
    """Extract the absolute module names imported by a Python file.

    Relative imports are resolved against the file's own package.
    """
    tree = ast.parse(file_path.read_text(encoding="utf-8"))
    package = module_name(file_path).split(".")
    if file_path.name != "__init__.py":
        package = package[:-1]
    imports: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = package[: len(package) - node.level + 1]
                imports.append(".".join([*base, node.module] if node.module else base))
            elif node.module:
                imports.append(node.module)
    return imports


def forbidden_imports(file_path: Path, prefixes: tuple[str, ...]) -> list[str]:
    return [
        name
        for name in extract_imports_from_file(file_path)
        if any(name == p or name.startswith(f"{p}.") for p in prefixes)
    ]


class TestImportResolution:
    def test_relative_imports_are_resolved(self):
        imports = extract_imports_from_file(PACKAGE_ROOT / "rules" / "copy_rule.py")

        assert f"{PACKAGE_NAME}.rules.base" in imports
        assert f"{PACKAGE_NAME}.transformations.field_transformation" in imports


class TestCoreBoundaries:
    """The engine core stays independent of the outer layers."""

    @pytest.mark.parametrize("package", CORE_PACKAGES)
    def test_core_does_not_import_outer_layers(self, package):
        outer = tuple(
            f"{PACKAGE_NAME}.{name}" for name in ("mapping", "infrastructure", "cli")
        )
        violations = {
            str(path.relative_to(PACKAGE_ROOT)): found
            for path in get_python_files(PACKAGE_ROOT / package)
            if (found := forbidden_imports(path, outer))
        }

        assert not violations, f"Core modules import outer layers: {violations}"

    def test_only_cli_imports_cli(self):
        cli = (f"{PACKAGE_NAME}.cli",)
        violations = {
            str(path.relative_to(PACKAGE_ROOT)): found
            for path in get_python_files(PACKAGE_ROOT)
            if path.relative_to(PACKAGE_ROOT).parts[0] not in ("cli", "cli_main.py")
            and (found := forbidden_imports(path, cli))
        }

        assert not violations, f"Non-CLI modules import the CLI: {violations}"
