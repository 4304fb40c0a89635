"""Smoke tests for example files: scripts are valid Python and documents load."""

import ast
from pathlib import Path

import pytest

from animstate.graph.loader import GraphLoader

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


def _parse_example(relative_path: str) -> ast.Module:
    """Parse an example script as an AST without running it."""
    path = EXAMPLES_DIR / relative_path
    if not path.exists():
        pytest.skip(f"Example not found: {path}")
    source = path.read_text()
    return ast.parse(source, filename=str(path))


def _has_function(tree: ast.Module, name: str) -> bool:
    """Check if the AST contains a function with the given name."""
    return any(
        isinstance(node, ast.FunctionDef) and node.name == name
        for node in ast.walk(tree)
    )


def _has_import(tree: ast.Module, module: str) -> bool:
    """Check if the AST imports the given module."""
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name == module:
                    return True
        if isinstance(node, ast.ImportFrom) and node.module == module:
            return True
    return False


class TestCharacterExample:
    def test_parses(self):
        tree = _parse_example("character/drive_character.py")
        assert _has_function(tree, "main")
        assert _has_function(tree, "on_transition")
        assert _has_import(tree, "animstate")

    def test_files_exist(self):
        assert (EXAMPLES_DIR / "character" / "animstate.yaml").exists()
        assert (EXAMPLES_DIR / "character" / "character.json").exists()
        assert (EXAMPLES_DIR / "character" / "unity_export.json").exists()

    @pytest.mark.parametrize("name", ["character.json", "unity_export.json"])
    def test_documents_load(self, name):
        is_valid, message = GraphLoader().validate_file(EXAMPLES_DIR / "character" / name)
        assert is_valid is True, message
