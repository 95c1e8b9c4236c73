"""Write sampled curves and the titration summary to CSV files.

This module is the output boundary between in-memory analysis results and
tabular artifacts; nothing upstream of it touches the filesystem.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, List

import pandas as pd

from .plotting.style import sanitize_filename


def curve_filename(result: Dict) -> str:
    """Return ``<id>_<slug>.csv`` for one analysis result."""
    slug = sanitize_filename(result.get("name", "titration"))
    return f"{result.get('titration_id', 0)}_{slug}.csv"


def save_curves_to_csv(
    results: Iterable[Dict], output_dir: str = "output"
) -> List[str]:
    """Save each sampled curve to its own CSV file.

    Args:
        results (Iterable[dict]): Outputs of ``analyze_titration``; each must
            hold a ``curve`` DataFrame.
        output_dir (str): Root output directory. Files go to
            ``<output_dir>/curves/``.

    Returns:
        list[str]: Paths of the written files, in input order.

    Raises:
        KeyError: If a result has no ``curve`` entry.
    """
    curve_dir = os.path.join(output_dir, "curves")
    os.makedirs(curve_dir, exist_ok=True)

    paths = []
    for res in results:
        if "curve" not in res:
            raise KeyError(
                f"Result for titration {res.get('titration_id')!r} has no curve"
            )
        path = os.path.join(curve_dir, curve_filename(res))
        res["curve"].to_csv(path, index=False)
        paths.append(path)

    print(f"Saved {len(paths)} titration curves to {curve_dir}")
    return paths


def save_summary_to_csv(summary_df: pd.DataFrame, output_dir: str = "output") -> str:
    """Save the per-titration summary table.

    Args:
        summary_df (pandas.DataFrame): Output from
            ``create_summary_dataframe``.
        output_dir (str): Directory where ``titration_summary.csv`` is written.

    Returns:
        str: Path to the written CSV.
    """
    os.makedirs(output_dir, exist_ok=True)
    summary_path = os.path.join(output_dir, "titration_summary.csv")
    summary_df.to_csv(summary_path, index=False)
    print(f"Saved titration summary to {summary_path}")
    return summary_path
