from __future__ import annotations

import ast
import importlib
from pathlib import Path

import tikibase
from tikibase import exceptions
from tikibase.exceptions import IssueError, TikibaseError
from tikibase.issue import EmptyDocument
from tikibase.location import Location


def _type_checking_imports(module_path: Path) -> list[ast.ImportFrom]:
    tree = ast.parse(module_path.read_text(encoding="utf-8"))
    found: list[ast.ImportFrom] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.If) and ast.unparse(node.test) == "TYPE_CHECKING":
            found.extend(child for child in node.body if isinstance(child, ast.ImportFrom))
    return found


def test_type_checking_imports_resolve() -> None:
    package_root = Path(tikibase.__file__).parent
    for module_path in sorted(package_root.rglob("*.py")):
        for node in _type_checking_imports(module_path):
            module = importlib.import_module(node.module or "")
            for alias in node.names:
                assert hasattr(module, alias.name), f"{module_path}: {node.module}.{alias.name}"


def test_issue_error_carries_the_issue() -> None:
    issue = EmptyDocument(Location("1.md"))
    error = IssueError(issue)
    assert isinstance(error, TikibaseError)
    assert error.issue is issue
    assert str(error) == "empty document"
    assert _type_checking_imports(Path(exceptions.__file__))
