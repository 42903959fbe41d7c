"""Tests for architecture import boundaries.

These tests ensure that the layer boundaries are maintained:
- Core modules (application, domain, infrastructure) must not import from CLI
- The domain layer must not import from infrastructure
"""

from __future__ import annotations

import ast
import re
from pathlib import Path

import pytest


# Root of the afas_update package
PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent / "afas_update"

CLI_PATTERN = r"(^|\.)cli(\.|$)"


def get_python_files(directory: Path) -> list[Path]:
    """Get all Python files in a directory recursively."""
    return list(directory.rglob("*.py"))


def extract_imports_from_file(file_path: Path) -> list[str]:
    """Extract all import statements from a Python file.

    Args:
        file_path: Path to Python file

    Returns:
        List of import strings (module names)
    """
    imports = []

    with open(file_path, "r", encoding="utf-8") as f:
        tree = ast.parse(f.read())

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.append(alias.name)
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                imports.append(node.module)

    return imports


def has_forbidden_import(imports: list[str], forbidden_pattern: str) -> list[str]:
    pattern = re.compile(forbidden_pattern)
    return [imp for imp in imports if pattern.search(imp)]


def find_violations(directory: Path, forbidden_pattern: str) -> list[str]:
    violations = []
    for py_file in get_python_files(directory):
        forbidden = has_forbidden_import(
            extract_imports_from_file(py_file), forbidden_pattern
        )
        if forbidden:
            rel_path = py_file.relative_to(PACKAGE_ROOT.parent)
            violations.append(f"{rel_path}: {forbidden}")
    return violations


class TestCLIImportBoundary:
    """Tests ensuring core modules do not import from CLI.

    The CLI layer is the outermost layer - it can import from anything, but
    nothing should import from it except CLI code itself.
    """

    @pytest.mark.parametrize("layer", ["application", "domain", "infrastructure"])
    def test_layer_does_not_import_cli(self, layer):
        layer_dir = PACKAGE_ROOT / layer
        assert layer_dir.is_dir()

        violations = find_violations(layer_dir, CLI_PATTERN)

        assert not violations, f"{layer} layer imports CLI modules:\n" + "\n".join(
            violations
        )

    def test_top_level_modules_do_not_import_cli(self):
        violations = []
        for py_file in PACKAGE_ROOT.glob("*.py"):
            forbidden = has_forbidden_import(
                extract_imports_from_file(py_file), CLI_PATTERN
            )
            if forbidden:
                violations.append(f"{py_file.name}: {forbidden}")

        assert not violations, "Top-level modules import CLI:\n" + "\n".join(violations)


class TestDomainBoundary:
    def test_domain_does_not_import_infrastructure(self):
        """Validation rules reach the registry only through the resolver protocol."""
        violations = find_violations(
            PACKAGE_ROOT / "domain", r"(^|\.)infrastructure(\.|$)"
        )

        assert not violations, "Domain layer imports infrastructure:\n" + "\n".join(
            violations
        )


class TestRegressionPrevention:
    def test_no_cli_logging_config_outside_cli(self):
        """Ensure cli.logging_config is not imported outside CLI."""
        excluded_dirs = {PACKAGE_ROOT / "cli"}

        violations = []
        for py_file in get_python_files(PACKAGE_ROOT):
            if any(py_file.is_relative_to(excluded) for excluded in excluded_dirs):
                continue

            imports = extract_imports_from_file(py_file)
            forbidden = has_forbidden_import(imports, r"cli\.logging_config")
            if forbidden:
                rel_path = py_file.relative_to(PACKAGE_ROOT.parent)
                violations.append(f"{rel_path}: {forbidden}")

        assert not violations, "cli.logging_config imported outside CLI:\n" + "\n".join(
            violations
        )
