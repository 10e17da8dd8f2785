"""
===========================================================
Examples Smoke Tests
===========================================================

Smoke-test the example scripts: the CLI demo writes its CSVs, the plot
demo saves a figure.
"""

import importlib.util
from pathlib import Path
import matplotlib
import numpy as np

matplotlib.use("Agg")


# --- Helper ---------------------------------------------------------------

def _write_ring_txt(path: Path, r: int = 8):
    side = 2*r + 1
    Y, X = np.mgrid[0:side, 0:side]
    M = np.abs(np.hypot(X - r, Y - r) - r) <= 0.5
    path.write_text("\n".join("".join("#" if v else " " for v in row) for row in M), encoding="utf-8")


def _import_example(name: str):
    """
    Dynamically import examples/<name>.py using its absolute path.
    Works even when pytest runs in a tmpdir.
    """
    project_root = Path(__file__).resolve().parents[1]
    demo_path = project_root / "examples" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(name, demo_path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module



# --- Tests ---------------------------------------------------------------

def test_demo_cli_exports(tmp_path: Path, monkeypatch):
    txt_path = tmp_path / "ring.txt"
    _write_ring_txt(txt_path)
    monkeypatch.chdir(tmp_path)

    demo = _import_example("demo_cli")
    exit_code = demo.main([str(txt_path)])
    assert exit_code == 0

    for name in ("marks.csv", "fitted_circle.csv", "residuals.csv"):
        assert (tmp_path / name).exists(), f"{name} not created"


def test_demo_plot_saves_figure(tmp_path: Path, capsys):
    txt_path = tmp_path / "ring.txt"
    _write_ring_txt(txt_path, r=6)
    out_png = tmp_path / "fit.png"

    demo = _import_example("demo_plot")
    assert demo.main([str(txt_path), "--save", str(out_png)]) == 0
    assert out_png.exists() and out_png.stat().st_size > 0
    assert "[verdict] Valid." in capsys.readouterr().out


def test_demo_cli_reports_unfittable_input(tmp_path: Path, monkeypatch, capsys):
    txt_path = tmp_path / "line.txt"
    txt_path.write_text("#######", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    demo = _import_example("demo_cli")
    assert demo.main([str(txt_path)]) == 1
    assert "Degenerate" in capsys.readouterr().out
    assert not (tmp_path / "marks.csv").exists()


def test_demo_plot_reports_blank_input(tmp_path: Path, capsys):
    txt_path = tmp_path / "blank.txt"
    txt_path.write_text("   \n   ", encoding="utf-8")

    demo = _import_example("demo_plot")
    assert demo.main([str(txt_path), "--save", str(tmp_path / "fit.png")]) == 1
    assert "[error] NoMarks" in capsys.readouterr().out
