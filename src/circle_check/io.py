from pathlib import Path
import numpy as np
import pandas as pd


def load_text(path: str, encoding: str = "utf-8") -> str:
    """
    Load a text submission.

    Parameters
    ----------
    path : str
        Text file path.
    encoding : str
        File encoding (default "utf-8").
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"File not found: {p}")
    return p.read_text(encoding=encoding)


def save_xy_csv(path: str, x, y):
    """
    Save paired (x, y) coordinates to a CSV.

    Parameters
    ----------
    path : str
        Output CSV file path.
    x, y : array-like
        Sequences of equal length containing coordinates.
    """
    arr = np.column_stack([x, y])
    np.savetxt(path, arr, delimiter=",", header="x,y", comments="", fmt="%.6f")


def residual_table(shape, circle) -> pd.DataFrame:
    """
    One row per mark: position, distance to the fitted center, signed
    residual (distance - radius) and angle in degrees (image coords).
    """
    d = circle.distances(shape.x, shape.y)
    return pd.DataFrame({
        "x": shape.x.astype(int),
        "y": shape.y.astype(int),
        "distance": d,
        "residual": d - circle.radius,
        "angle_deg": np.degrees(circle.angles(shape.x, shape.y)),
    })


def save_residuals_csv(path: str, shape, circle):
    residual_table(shape, circle).to_csv(path, index=False, float_format="%.6f")


def save_verdict_json(path: str, verdict):
    Path(path).write_text(verdict.to_json(indent=2, ensure_ascii=False), encoding="utf-8")
