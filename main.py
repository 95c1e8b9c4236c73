#!/usr/bin/env python3
"""
Main script for simulating the titration catalog.
"""

# Pipeline overview:
# 1) Load and validate the titration catalog (optionally a subset by id).
# 2) Sample each pH(V) curve on a 0.5 cm^3 grid refined around every
#    equivalence volume, and compute initial, half-equivalence and
#    equivalence pH values from the equilibrium solver.
# 3) Detect steep jumps on the sampled curve and cross-check computed
#    equivalence pH and the recommended indicator against catalog values.
# 4) Export per-titration curves, a summary table, and curve figures.

import argparse
import logging
import os
import sys
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from burette.analysis import analyze_titration, create_summary_dataframe
from burette.catalog import get_titration_by_id, load_titration_catalog
from burette.output import save_curves_to_csv, save_summary_to_csv
from burette.plotting import plot_titration_curves
from burette.schema import SummaryColumns

SUMMARY = SummaryColumns()


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate acid-base titrations from the built-in catalog.",
    )
    parser.add_argument(
        "--output-dir",
        default="output",
        help="Directory for curves, summary table, figures and log (default: output)",
    )
    parser.add_argument(
        "--titration-id",
        type=int,
        action="append",
        dest="titration_ids",
        help="Catalog id to simulate; repeat for several (default: all)",
    )
    parser.add_argument(
        "--max-volume",
        type=float,
        default=None,
        help="Last sampled titrant volume in cm^3 "
        "(default: twice the last equivalence volume)",
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Skip figure generation",
    )
    return parser


def _configure_logging(output_dir: str) -> str:
    os.makedirs(output_dir, exist_ok=True)
    log_path = os.path.join(output_dir, "titration_simulation.log")
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_path, mode="w"),
        ],
        force=True,
    )
    return log_path


def main(argv: list[str] | None = None) -> int:
    """Run the simulation pipeline and return a process exit code."""
    args = _build_arg_parser().parse_args(argv)
    output_dir = args.output_dir
    log_path = _configure_logging(output_dir)

    start_time = time.time()
    logging.info("Initializing titration simulation pipeline")

    step_start = time.time()
    catalog = load_titration_catalog()
    if args.titration_ids:
        try:
            records = [get_titration_by_id(i, catalog) for i in args.titration_ids]
        except KeyError as exc:
            logging.error("Unknown titration id: %s", exc)
            return 2
    else:
        records = list(catalog)
    logging.info(
        "Loaded %d catalog entries in %.2f seconds; simulating %d",
        len(catalog),
        time.time() - step_start,
        len(records),
    )

    step_start = time.time()
    results = [analyze_titration(r, max_volume=args.max_volume) for r in records]
    logging.info(
        "Curve sampling and analysis completed in %.2f seconds",
        time.time() - step_start,
    )
    total_points = sum(len(res["curve"]) for res in results)
    logging.info("Total curve points computed: %d", total_points)

    summary_df = create_summary_dataframe(results)
    mismatched = summary_df[~summary_df[SUMMARY.indicator_ok]]
    if not mismatched.empty:
        logging.warning(
            "%d titration(s) list an indicator that misses every catalog "
            "equivalence pH: %s",
            len(mismatched),
            ", ".join(str(i) for i in mismatched[SUMMARY.titration_id]),
        )

    step_start = time.time()
    curve_paths = save_curves_to_csv(results, output_dir)
    summary_path = save_summary_to_csv(summary_df, output_dir)
    logging.info("CSV export completed in %.2f seconds", time.time() - step_start)

    figure_paths = []
    if not args.no_plots:
        step_start = time.time()
        figure_paths = plot_titration_curves(results, output_dir)
        logging.info(
            "Generated %d titration curve figures in %.2f seconds",
            len(figure_paths),
            time.time() - step_start,
        )

    logging.info("Total execution time: %.2f seconds", time.time() - start_time)
    logging.info("Simulation pipeline completed successfully")
    logging.info("Generated output files:")
    for path in curve_paths:
        logging.info("  - Curve CSV: %s", path)
    for path in figure_paths:
        logging.info("  - Curve figure: %s", path)
    logging.info("  - Summary CSV: %s", summary_path)
    logging.info("  - Log: %s", log_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
