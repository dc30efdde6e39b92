"""Packaging correctness verification for yaml-tabular.

Tests validate:
- Base install imports cleanly and exposes the public API
- py.typed marker is present in the wheel
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    """Verify the base install exposes a working public API."""

    def test_import_yaml_tabular(self):  # type: ignore[no-untyped-def]
        """Top-level import succeeds."""
        import yaml_tabular

        assert hasattr(yaml_tabular, "read_yaml")
        assert hasattr(yaml_tabular, "infer_schema")
        assert hasattr(yaml_tabular, "extract")
        assert hasattr(yaml_tabular, "to_json")

    def test_read_yaml_basic(self):  # type: ignore[no-untyped-def]
        """read_yaml() works end to end."""
        from yaml_tabular import read_yaml

        result = read_yaml("a: 1\n")
        assert result.to_records() == [{"a": 1}]

    def test_subpackages_import(self):  # type: ignore[no-untyped-def]
        """schema and tree subpackages import and expose their components."""
        from yaml_tabular.schema import SchemaInferrer, ValueConverter
        from yaml_tabular.tree import DocumentParser, TreeBuilder

        assert SchemaInferrer and ValueConverter and DocumentParser and TreeBuilder


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        # Use poetry build since that's the project's build system
        result = subprocess.run(
            ["poetry", "build", "-f", "wheel"],
            cwd=str(PROJECT_ROOT),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """py.typed marker must be included in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            py_typed_files = [n for n in names if n.endswith("py.typed")]
            assert py_typed_files, f"py.typed not found in wheel. Contents: {names}"

    def test_no_pycache_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """__pycache__ directories must not be in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            pycache_files = [n for n in zf.namelist() if "__pycache__" in n]
            assert not pycache_files, f"__pycache__ found in wheel: {pycache_files}"

    def test_all_source_modules_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """All source modules must be present in the wheel."""
        expected_modules = [
            "yaml_tabular/__init__.py",
            "yaml_tabular/api.py",
            "yaml_tabular/cache.py",
            "yaml_tabular/errors.py",
            "yaml_tabular/extraction.py",
            "yaml_tabular/path.py",
            "yaml_tabular/reader.py",
            "yaml_tabular/result.py",
            "yaml_tabular/serializer.py",
            "yaml_tabular/schema/__init__.py",
            "yaml_tabular/schema/config.py",
            "yaml_tabular/schema/convert.py",
            "yaml_tabular/schema/inference.py",
            "yaml_tabular/schema/scalars.py",
            "yaml_tabular/schema/types.py",
            "yaml_tabular/schema/unify.py",
            "yaml_tabular/tree/__init__.py",
            "yaml_tabular/tree/builder.py",
            "yaml_tabular/tree/nodes.py",
            "yaml_tabular/tree/parser.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), (
                    f"Module {module} not found in wheel"
                )

    def test_metadata_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """Wheel metadata must include correct package info."""
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if "METADATA" in n]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "yaml-tabular" in metadata.lower() or "yaml_tabular" in metadata.lower()
            assert "0.1.0" in metadata


class TestPackageMetadata:
    """Verify pyproject.toml metadata completeness."""

    def test_version(self):  # type: ignore[no-untyped-def]
        """Package version must be 0.1.0."""
        import yaml_tabular

        assert yaml_tabular.__version__ == "0.1.0"

    def test_core_exports(self):  # type: ignore[no-untyped-def]
        """__all__ must include the documented entry points."""
        import yaml_tabular

        expected = {
            "DocumentParser",
            "InferenceConfig",
            "PathExtractor",
            "ReadOptions",
            "SchemaInferrer",
            "ValueConverter",
            "YamlReader",
            "read_yaml",
        }
        assert expected <= set(yaml_tabular.__all__)
