"""
missingno figures for the missing-data walkthrough.

Usage (from project root)
-------------------------
# Write all four nullity figures for the toy listings to figures/:
python -m dsblog.features.plots
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional

import matplotlib.pyplot as plt
import missingno as msno
import pandas as pd

from dsblog.config import FIGURES_DIR, configure_logging

log = logging.getLogger(__name__)

PLOTTERS = {
    "matrix": msno.matrix,
    "bar": msno.bar,
    "heatmap": msno.heatmap,
    "dendrogram": msno.dendrogram,
}


def plot_nullity(df: pd.DataFrame, kind: str = "matrix", save_path=None, **kwargs) -> plt.Figure:
    """
    Draw one of missingno's four nullity plots.

    Parameters
    ----------
    df : pd.DataFrame
    kind : {"matrix", "bar", "heatmap", "dendrogram"}
    save_path : str or Path, optional
        If given, the figure is saved there (parent folders are created).
    **kwargs
        Passed to the missingno function, e.g. `figsize` or `fontsize`.

    Returns
    -------
    matplotlib.figure.Figure
    """
    try:
        plotter = PLOTTERS[kind]
    except KeyError:
        raise ValueError(f"Unknown nullity plot '{kind}'. Choose one of: {', '.join(PLOTTERS)}") from None

    ax = plotter(df, **kwargs)
    fig = ax.get_figure()
    if save_path is not None:
        path = Path(save_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, bbox_inches="tight")
        log.info("Saved %s plot to %s", kind, path)
    return fig


def save_nullity_report(df: pd.DataFrame, out_dir=FIGURES_DIR, prefix: str = "nullity") -> Dict[str, Path]:
    """
    Save all four nullity plots as PNG files in `out_dir`.

    Returns
    -------
    dict
        Mapping of plot kind to the written file.
    """
    paths = {}
    for kind in PLOTTERS:
        path = Path(out_dir) / f"{prefix}_{kind}.png"
        fig = plot_nullity(df, kind, save_path=path)
        plt.close(fig)
        paths[kind] = path
    return paths


def main(out_dir: Optional[str] = None) -> Dict[str, Path]:
    from dsblog.data.toy import airbnb_listings
    from dsblog.features.build_features import prune_columns

    df = prune_columns(airbnb_listings())
    return save_nullity_report(df, out_dir or FIGURES_DIR)


if __name__ == "__main__":
    import matplotlib

    matplotlib.use("Agg")
    configure_logging()
    for kind, path in main().items():
        log.info("%s -> %s", kind, os.path.relpath(path))
