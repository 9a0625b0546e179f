"""依存方向の制約テスト。

アーキテクチャで定めた依存ルールをコードレベルで検証する。
- aggregation/ と ingestion/ は interfaces/ にのみ依存可
- store/ への直接依存は禁止
- aggregation/ はI/Oを行うライブラリに依存しない
"""

import ast
from pathlib import Path

BACKEND_ROOT = Path(__file__).parent.parent.parent / "backend"

# これらのモジュールは interfaces/ にのみ依存すべき
RESTRICTED_MODULES = ["aggregation", "ingestion"]

# これらへの直接依存を禁止
FORBIDDEN_IMPORTS = ["backend.store"]

# 集計コアは純粋なメモリ内変換であること
CORE_FORBIDDEN_IMPORTS = ["sqlite3", "fastapi", "pandas", "backend.ingestion"]


def _collect_imports(filepath: Path) -> list[str]:
    """Pythonファイルからimport文を抽出する。"""
    source = filepath.read_text(encoding="utf-8")
    try:
        tree = ast.parse(source)
    except SyntaxError:
        return []

    imports = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.append(alias.name)
        elif isinstance(node, ast.ImportFrom) and node.module:
            imports.append(node.module)
    return imports


def _find_violations(module_names: list[str], forbidden: list[str]) -> list[str]:
    violations = []
    for module_name in module_names:
        module_dir = BACKEND_ROOT / module_name
        if not module_dir.exists():
            continue

        for py_file in module_dir.rglob("*.py"):
            imports = _collect_imports(py_file)
            for imp in imports:
                for prefix in forbidden:
                    if imp == prefix or imp.startswith(prefix + "."):
                        rel_path = py_file.relative_to(BACKEND_ROOT.parent)
                        violations.append(f"{rel_path}: imports {imp}")
    return violations


def test_no_direct_store_imports():
    """aggregation/ と ingestion/ が store/ を直接importしていないことを検証。"""
    violations = _find_violations(RESTRICTED_MODULES, FORBIDDEN_IMPORTS)
    assert violations == [], "依存方向違反を検出:\n" + "\n".join(f"  - {v}" for v in violations)


def test_aggregation_core_has_no_io_imports():
    """aggregation/ がDB・HTTP・ファイル形式のライブラリをimportしていないことを検証。"""
    violations = _find_violations(["aggregation"], CORE_FORBIDDEN_IMPORTS)
    assert violations == [], "集計コアのI/O依存を検出:\n" + "\n".join(f"  - {v}" for v in violations)
