"""Smoke test for the command line simulation runner."""

import pathlib
import runpy

SCRIPT = pathlib.Path(__file__).resolve().parents[1] / "scripts" / "simulate.py"


def test_runs_and_exports(tmp_path):
    main = runpy.run_path(str(SCRIPT))["main"]

    code = main(["--dozens", "20", "--iterations", "3000", "--batch-size", "500", "--seed", "11", "--export-dir", str(tmp_path)])

    assert code == 0
    quadras = tmp_path / "winners_quadra.csv"
    assert quadras.exists()
    assert quadras.read_text(encoding="utf-8").startswith("Column_1,")
