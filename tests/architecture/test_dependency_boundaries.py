"""依存境界（core -> export/api、export -> api）の破りを検出するテスト。"""

from __future__ import annotations

import ast
from pathlib import Path

_PACKAGE = "wedgemark"


def _src_root() -> Path:
    for parent in Path(__file__).resolve().parents:
        if (parent / "src" / _PACKAGE).is_dir():
            return parent / "src"
    raise RuntimeError("src/wedgemark が見つからない")


def _module_of(path: Path, src_root: Path) -> tuple[str, bool]:
    parts = list(path.relative_to(src_root).with_suffix("").parts)
    is_package = parts[-1] == "__init__"
    if is_package:
        parts = parts[:-1]
    return ".".join(parts), is_package


def _importfrom_targets(*, current_module: str, is_package: bool, node: ast.ImportFrom) -> set[str]:
    level = int(node.level or 0)
    if level == 0:
        base = node.module or ""
    else:
        package = current_module if is_package else current_module.rsplit(".", 1)[0]
        parts = package.split(".")
        if level - 1 >= len(parts):
            raise ValueError(f"相対 import の解決に失敗: module={current_module!r}, level={level}")
        base = ".".join(parts[: len(parts) - (level - 1)])
        if node.module:
            base = f"{base}.{node.module}"
    if not base:
        return set()
    return {base} | {f"{base}.{a.name}" for a in node.names if a.name != "*"}


def _imports_in(path: Path, src_root: Path) -> set[str]:
    module, is_package = _module_of(path, src_root)
    found: set[str] = set()
    for node in ast.walk(ast.parse(path.read_text(encoding="utf-8"))):
        if isinstance(node, ast.Import):
            found.update(a.name for a in node.names)
        elif isinstance(node, ast.ImportFrom):
            found.update(_importfrom_targets(current_module=module, is_package=is_package, node=node))
    return found


def _assert_no_forbidden_imports(subpackage: str, forbidden: tuple[str, ...]) -> None:
    src_root = _src_root()
    violations: list[str] = []
    for path in sorted((src_root / _PACKAGE / subpackage).rglob("*.py")):
        bad = sorted(m for m in _imports_in(path, src_root) if m.startswith(forbidden))
        if bad:
            violations.append(f"{path.relative_to(src_root)}: {', '.join(bad)}")
    if violations:
        joined = "\n".join(violations)
        raise AssertionError(f"依存境界違反の import を検出:\n{joined}")


def test_core_does_not_depend_on_export_or_api() -> None:
    _assert_no_forbidden_imports("core", ("wedgemark.export", "wedgemark.api"))


def test_export_does_not_depend_on_api() -> None:
    _assert_no_forbidden_imports("export", ("wedgemark.api",))


def test_importfrom_targets_resolves_relative_imports() -> None:
    node = ast.parse("from ..export import svg\n").body[0]
    assert isinstance(node, ast.ImportFrom)
    got = _importfrom_targets(current_module="wedgemark.core.wedge", is_package=False, node=node)
    assert {"wedgemark.export", "wedgemark.export.svg"} <= got

    node = ast.parse("from . import geometry\n").body[0]
    assert isinstance(node, ast.ImportFrom)
    got = _importfrom_targets(current_module="wedgemark.core.path", is_package=False, node=node)
    assert "wedgemark.core.geometry" in got

    node = ast.parse("from ..export import *\n").body[0]
    assert isinstance(node, ast.ImportFrom)
    got = _importfrom_targets(current_module="wedgemark.core.wedge", is_package=False, node=node)
    assert got == {"wedgemark.export"}
