import matplotlib.pyplot as plt

from .core import circle_points


def plot_fit(shape, circle, verdict=None, title="Text circle check", show=True):
    """
    Overlay the marks and the fitted circle (image coords, y downward).
    Returns the matplotlib Figure.
    """
    fig, ax = plt.subplots(figsize=(5, 5))
    Xf, Yf = circle_points(circle.cx, circle.cy, circle.radius)
    ax.scatter(shape.x, shape.y, s=20, marker="s", label=f"marks (n={shape.count})")
    ax.plot(Xf, Yf, "r", linewidth=2, label=f"circle fit (r≈{circle.radius:.2f})")
    if verdict is not None and verdict.offending:
        ox, oy = zip(*verdict.offending)
        ax.scatter(ox, oy, s=40, facecolors="none", edgecolors="orange",
                   label=f"offending ({verdict.reason.value})")
    ax.set_aspect("equal", "box")
    ax.invert_yaxis()
    ax.legend(frameon=False, loc="best")
    ax.set_title(title if verdict is None else f"{title}: {verdict.status}")
    ax.set_xlabel("x (column)")
    ax.set_ylabel("y (row)")
    fig.tight_layout()
    if show:
        plt.show()
    return fig
