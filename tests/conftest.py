import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path so tests can import the local modules
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from record_keys import Sheet  # noqa: E402


@pytest.fixture
def countries():
    return Sheet.from_rows([
        ["Country", "Population"],
        ["China", "1.41B"],
        ["India", "1.39B"],
        ["US", "333M"],
    ], 0)


@pytest.fixture
def areas():
    return Sheet.from_rows([
        ["Country", "Area"],
        ["Canada", "10M km²"],
        ["US", "9.8M km²"],
        ["China", "9.6M km²"],
    ], 1)


@pytest.fixture
def write_tsv(tmp_path):
    def _write(name, rows, delimiter='\t'):
        path = tmp_path / name
        path.write_text(''.join(delimiter.join(row) + '\n' for row in rows), encoding='utf-8')
        return path
    return _write
