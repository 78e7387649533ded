from pathlib import Path

import falling_block_rl.game

PACKAGE_ROOT = Path(falling_block_rl.game.__file__).resolve().parent.parent


def test_modules_open_with_code_or_docstring():
    modules = sorted(PACKAGE_ROOT.rglob("*.py"))
    assert modules
    for path in modules:
        first_line = path.read_text(encoding="utf-8").splitlines()[0]
        assert first_line.startswith(("from __future__ import annotations", '"""')), path
