"""Tests for packaging metadata and pyproject.toml validation."""

import ast
import re
import sys
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib

ROOT = Path(__file__).resolve().parents[2]

# Import names that differ from their distribution name on the index
IMPORT_TO_DISTRIBUTION = {
    "dotenv": "python-dotenv",
    "pydantic_settings": "pydantic-settings",
}


def load_pyproject():
    with open(ROOT / "pyproject.toml", "rb") as f:
        return tomllib.load(f)


def parse_package_name(dep_string):
    """Extract package name from a dependency string like ``tomli>=2.0; python_version < '3.11'``."""
    match = re.match(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)", dep_string)
    assert match, f"Unparseable dependency: {dep_string!r}"
    return match.group(1).lower().replace("_", "-")


def third_party_imports(paths):
    """Top-level third-party module names imported by the given files."""
    stdlib = set(sys.stdlib_module_names)
    names = set()
    for path in paths:
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                names.update(alias.name.split(".")[0] for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                names.add(node.module.split(".")[0])
    local = {"slotbook", "main", "tomli", "tomllib"}
    return {n for n in names if n not in stdlib and n not in local}


class TestPackagingMetadata:
    """Tests for pyproject.toml packaging metadata."""

    def test_build_system_exists(self):
        build_system = load_pyproject()["build-system"]
        assert "build-backend" in build_system
        assert isinstance(build_system["requires"], list)
        assert len(build_system["requires"]) > 0

    def test_project_identity(self):
        project = load_pyproject()["project"]
        assert project["name"] == "slotbook"
        assert re.match(r"^\d+\.\d+\.\d+$", project["version"])
        assert project["requires-python"]

    def test_version_matches_package(self):
        init_source = (ROOT / "slotbook" / "__init__.py").read_text(encoding="utf-8")
        match = re.search(r'__version__\s*=\s*"([^"]+)"', init_source)
        assert match
        assert match.group(1) == load_pyproject()["project"]["version"]

    def test_console_script_targets_main(self):
        scripts = load_pyproject()["project"]["scripts"]
        assert scripts["slotbook"] == "main:main"


class TestDependencySynchronization:
    """Every third-party import must be declared in pyproject.toml."""

    def test_runtime_imports_declared(self):
        declared = {parse_package_name(d) for d in load_pyproject()["project"]["dependencies"]}
        sources = list((ROOT / "slotbook").rglob("*.py")) + [ROOT / "main.py"]

        for module in third_party_imports(sources):
            dist = IMPORT_TO_DISTRIBUTION.get(module, module)
            assert dist in declared, f"{module} imported but {dist} not in dependencies"

    def test_test_imports_declared(self):
        project = load_pyproject()["project"]
        declared = {parse_package_name(d) for d in project["dependencies"]}
        declared |= {parse_package_name(d) for d in project["optional-dependencies"]["dev"]}
        sources = list((ROOT / "tests").rglob("*.py"))

        for module in third_party_imports(sources):
            dist = IMPORT_TO_DISTRIBUTION.get(module, module)
            assert dist in declared, f"{module} imported in tests but {dist} not declared"

    def test_parse_package_name(self):
        assert parse_package_name("pydantic-settings>=2.1") == "pydantic-settings"
        assert parse_package_name("tomli>=2.0; python_version < '3.11'") == "tomli"
        assert parse_package_name("Python_Dotenv") == "python-dotenv"


class TestLazyExports:
    def test_top_level_names_resolve(self):
        import slotbook
        from slotbook.services.booking.coordinator import BookingCoordinator

        assert slotbook.BookingCoordinator is BookingCoordinator
        assert callable(slotbook.get_settings)
        assert sorted(slotbook.__all__) == sorted(
            ["get_settings", "setup_structured_logging", "BackendApiClient", "BookingCoordinator"]
        )

    def test_unknown_name(self):
        import pytest

        import slotbook

        with pytest.raises(AttributeError):
            slotbook.does_not_exist
