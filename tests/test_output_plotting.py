"""Tests for CSV export and curve figures."""

import os

import pandas as pd
import pytest

from burette.analysis import analyze_titration, create_summary_dataframe
from burette.output import curve_filename, save_curves_to_csv, save_summary_to_csv
from burette.plotting import plot_titration_curve, plot_titration_curves
from burette.plotting.style import sanitize_filename
from burette.schema import CurveColumns, SummaryColumns


@pytest.fixture(scope="module")
def results(catalog):
    return [analyze_titration(catalog[i]) for i in (1, 11)]


class TestFilenames:
    """Formula names become filesystem-safe tokens."""

    def test_subscripts_folded(self):
        assert sanitize_filename("H₂SO₃ + NaOH") == "H2SO3_and_NaOH"

    def test_empty_name_falls_back(self):
        assert sanitize_filename("  ") == "figure"

    def test_curve_filename(self, results):
        assert curve_filename(results[0]) == "1_HCl_and_NaOH.csv"


class TestCsvExport:
    """Curves and summary are written under the output directory."""

    def test_save_curves(self, results, tmp_path):
        paths = save_curves_to_csv(results, output_dir=str(tmp_path))
        assert [os.path.basename(p) for p in paths] == [
            "1_HCl_and_NaOH.csv",
            "11_H2SO3_and_NaOH.csv",
        ]
        df = pd.read_csv(paths[1])
        assert list(df.columns) == list(results[1]["curve"].columns)
        assert len(df) == len(results[1]["curve"])
        assert df[CurveColumns().regime].iloc[0] == "initial"

    def test_missing_curve_raises(self, tmp_path):
        with pytest.raises(KeyError, match="no curve"):
            save_curves_to_csv([{"titration_id": 3}], output_dir=str(tmp_path))

    def test_save_summary(self, results, tmp_path):
        path = save_summary_to_csv(
            create_summary_dataframe(results), output_dir=str(tmp_path)
        )
        assert path == os.path.join(str(tmp_path), "titration_summary.csv")
        df = pd.read_csv(path)
        assert list(df[SummaryColumns().titration_id]) == [1, 11]


class TestCurvePlots:
    """Figures are saved as PNG/PDF/SVG bundles."""

    def test_plot_single_curve(self, results, tmp_path):
        png = plot_titration_curve(results[1], output_dir=str(tmp_path))
        assert png.endswith("11_H2SO3_and_NaOH.png")
        for ext in ("png", "pdf", "svg"):
            assert os.path.exists(png[: -len("png")] + ext)

    def test_plot_with_explicit_indicator(self, results, tmp_path):
        png = plot_titration_curve(
            results[0], output_dir=str(tmp_path), indicator_id="methyl-orange"
        )
        assert os.path.exists(png)

    def test_unknown_indicator_raises(self, results, tmp_path):
        with pytest.raises(KeyError, match="litmus"):
            plot_titration_curve(
                results[0], output_dir=str(tmp_path), indicator_id="litmus"
            )

    def test_missing_keys_raise(self, tmp_path):
        with pytest.raises(KeyError, match="missing required keys"):
            plot_titration_curve({"name": "x"}, output_dir=str(tmp_path))

    def test_plot_all(self, results, tmp_path):
        paths = plot_titration_curves(results, output_dir=str(tmp_path))
        assert len(paths) == 2
        assert all(os.path.dirname(p).endswith("figures") for p in paths)

    def test_empty_results_raise(self, tmp_path):
        with pytest.raises(ValueError, match="nothing to plot"):
            plot_titration_curves([], output_dir=str(tmp_path))
