# tests/test_gen_factory.py
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from gen_factory import make_factory_case  # noqa: E402
from factory.main import build_and_solve  # noqa: E402


@pytest.mark.parametrize("seed", range(10))
def test_generated_cases_solve(seed):
    case = make_factory_case(seed)
    out = build_and_solve(case)
    assert out["status"] == "ok", out
    assert all(v >= -1e-9 for v in out["units"].values())
    for item in case["targets"]:
        assert out["factories"][item] >= 1


def test_seed_is_deterministic():
    assert make_factory_case(7) == make_factory_case(7)
