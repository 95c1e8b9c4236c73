"""Tests for curve sampling and the curve DataFrame."""

import pytest

from burette.chemistry.equilibrium import solve_ph
from burette.curve import (
    EQUIVALENCE_OFFSETS_ML,
    curve_to_dataframe,
    default_max_volume,
    sample_curve,
    sample_volumes,
)
from burette.errors import PreconditionViolation
from burette.schema import CurveColumns

COLUMNS = CurveColumns()


class TestSampleVolumes:
    """Grid and refinement volumes."""

    def test_default_max_is_twice_last_equivalence(self, catalog):
        assert default_max_volume(catalog[1]) == 50.0
        assert default_max_volume(catalog[13]) == 150.0

    def test_grid_spans_zero_to_max(self, catalog):
        volumes = sample_volumes(catalog[1])
        assert volumes[0] == 0.0
        assert volumes[-1] == 50.0
        assert 12.5 in volumes

    def test_sorted_ascending(self, catalog):
        volumes = sample_volumes(catalog[13])
        assert volumes == sorted(volumes)

    def test_refinement_around_every_equivalence(self, catalog):
        """Each diprotic equivalence volume gets all six offsets."""
        volumes = sample_volumes(catalog[11])
        for veq in (25.0, 50.0):
            for offset in EQUIVALENCE_OFFSETS_ML:
                assert any(v == pytest.approx(veq + offset) for v in volumes)

    def test_refinement_beyond_max_is_dropped(self, catalog):
        volumes = sample_volumes(catalog[1], max_volume=25.0)
        assert max(volumes) == 25.0
        assert any(v == pytest.approx(24.99) for v in volumes)
        assert not any(v > 25.0 for v in volumes)

    @pytest.mark.parametrize("max_volume", [0.0, -10.0, float("inf")])
    def test_invalid_max_volume_raises(self, catalog, max_volume):
        with pytest.raises(PreconditionViolation):
            sample_volumes(catalog[1], max_volume=max_volume)

    def test_invalid_step_raises(self, catalog):
        with pytest.raises(PreconditionViolation, match="step"):
            sample_volumes(catalog[1], step=0.0)


class TestSampleCurve:
    """Points produced by the sampler."""

    def test_points_match_solver(self, catalog):
        record = catalog[5]
        for point in sample_curve(record):
            assert point.ph == solve_ph(record, point.volume)

    def test_idempotent(self, catalog):
        record = catalog[12]
        assert sample_curve(record) == sample_curve(record)

    def test_steep_jump_is_resolved(self, catalog):
        """Refined points capture most of the rise across the equivalence."""
        points = {round(p.volume, 2): p.ph for p in sample_curve(catalog[1])}
        assert points[25.01] - points[24.99] > 4.0


class TestCurveDataFrame:
    """Tidy DataFrame conversion."""

    def test_columns_without_record(self, catalog):
        df = curve_to_dataframe(sample_curve(catalog[1]))
        assert list(df.columns) == [COLUMNS.volume, COLUMNS.ph]

    def test_regime_column_with_record(self, catalog):
        record = catalog[11]
        df = curve_to_dataframe(sample_curve(record), record=record)
        assert list(df.columns) == [COLUMNS.volume, COLUMNS.ph, COLUMNS.regime]
        assert df[COLUMNS.regime].iloc[0] == "initial"
        assert df[COLUMNS.regime].iloc[-1] == "excess_titrant"
        assert "equivalence_2" in set(df[COLUMNS.regime])
