"""Check the equilibrium solver against textbook values and curve invariants."""

import math

import numpy as np
import pytest

from burette.chemistry.equilibrium import (
    henderson_hasselbalch,
    regime_name,
    solve_ph,
    weak_acid_ph,
)
from burette.chemistry.records import Topology
from burette.curve import sample_curve
from burette.errors import DomainError, PreconditionViolation, UnreachableTopology


class TestStrongAcidStrongBase:
    """HCl 25.0 cm^3 at 0.100 M titrated with 0.100 M NaOH."""

    def test_initial_ph(self, catalog):
        assert solve_ph(catalog[1], 0.0) == pytest.approx(1.00, abs=0.02)

    def test_equivalence_is_neutral(self, catalog):
        assert solve_ph(catalog[1], 25.0) == pytest.approx(7.00, abs=0.01)

    def test_excess_base(self, catalog):
        """5e-3 mol OH- minus 2.5e-3 mol H+ in 75 cm^3 gives pH 12.52."""
        assert solve_ph(catalog[1], 50.0) == pytest.approx(12.52, abs=0.01)

    @pytest.mark.parametrize("titration_id", [1, 2, 3, 4])
    def test_strong_pairs_are_neutral_at_equivalence(self, catalog, titration_id):
        record = catalog[titration_id]
        assert math.isclose(
            solve_ph(record, record.equivalence_volume), 7.0, abs_tol=1e-6
        )


class TestWeakAcidStrongBase:
    """Ethanoic acid 25.0 cm^3 at 0.100 M (Ka 1.8e-5) with 0.100 M NaOH."""

    def test_initial_ph(self, catalog):
        assert solve_ph(catalog[5], 0.0) == pytest.approx(2.87, abs=0.01)

    def test_half_equivalence(self, catalog):
        assert solve_ph(catalog[5], 12.5) == pytest.approx(4.74, abs=0.01)

    def test_equivalence_is_basic(self, catalog):
        assert solve_ph(catalog[5], 25.0) == pytest.approx(8.72, abs=0.01)

    @pytest.mark.parametrize("titration_id", [5, 6, 7, 8])
    def test_half_equivalence_equals_pka(self, catalog, titration_id):
        """At V_eq/2 the buffer ratio is one, so pH = pKa exactly."""
        record = catalog[titration_id]
        ph = solve_ph(record, record.equivalence_volume / 2.0)
        assert math.isclose(ph, record.pka, abs_tol=1e-6)

    def test_buffer_never_drops_below_initial(self, catalog):
        """HF is strong enough that raw HH would dip below the starting pH."""
        record = catalog[6]
        initial = solve_ph(record, 0.0)
        assert solve_ph(record, 0.5) >= initial

    def test_buffer_reads_initial_ph_until_hh_catches_up(self, catalog):
        """Raw HF buffer values lie below the initial pH up to about 2.8 cm^3."""
        record = catalog[6]
        assert solve_ph(record, 1.0) == solve_ph(record, 0.0)
        expected = henderson_hasselbalch(record.pka, 1.0e-3, 4.5e-3 - 1.0e-3)
        assert math.isclose(solve_ph(record, 10.0), expected, abs_tol=1e-9)

    def test_excess_base(self, catalog):
        """1.0e-3 mol surplus OH- in 60 cm^3 gives pH 14 + log10(1/60)."""
        expected = 14.0 + math.log10(1.0e-3 / 0.060)
        assert math.isclose(solve_ph(catalog[5], 35.0), expected, abs_tol=1e-9)


class TestWeakBaseStrongAcid:
    """Ammonia 25.0 cm^3 at 0.100 M titrated with 0.100 M HCl."""

    def test_initial_ph(self, catalog):
        assert solve_ph(catalog[9], 0.0) == pytest.approx(11.13, abs=0.02)

    def test_half_equivalence_equals_pka(self, catalog):
        record = catalog[9]
        assert math.isclose(solve_ph(record, 12.5), record.pka, abs_tol=1e-6)

    def test_equivalence_is_acidic(self, catalog):
        assert solve_ph(catalog[9], 25.0) == pytest.approx(5.28, abs=0.02)

    def test_excess_acid(self, catalog):
        """2.5e-3 mol surplus H+ in 75 cm^3."""
        expected = -math.log10(2.5e-3 / 0.075)
        assert math.isclose(solve_ph(catalog[9], 50.0), expected, abs_tol=1e-9)


class TestPolyprotic:
    """Diprotic and triprotic acids titrated with NaOH."""

    @pytest.mark.parametrize("titration_id", [11, 12])
    def test_diprotic_half_equivalence_equals_pkas(self, catalog, titration_id):
        record = catalog[titration_id]
        v1, v2 = record.equivalence_volumes
        assert math.isclose(solve_ph(record, v1 / 2.0), record.pka1, abs_tol=1e-6)
        assert math.isclose(
            solve_ph(record, (v1 + v2) / 2.0), record.pka2, abs_tol=1e-6
        )

    def test_triprotic_half_equivalence_equals_pkas(self, catalog):
        record = catalog[13]
        for volume, pka in zip((12.5, 37.5, 62.5), record.pkas):
            assert math.isclose(solve_ph(record, volume), pka, abs_tol=1e-6)

    def test_first_equivalence_is_ampholyte_mean(self, catalog):
        record = catalog[11]
        expected = 0.5 * (record.pka1 + record.pka2)
        assert math.isclose(solve_ph(record, 25.0), expected, abs_tol=1e-9)

    def test_diprotic_second_equivalence_is_conjugate_base(self, catalog):
        """SO₃²⁻ from 5.0e-3 mol NaOH in 75 cm^3, Kb = Kw/Ka2."""
        record = catalog[11]
        poh = 0.5 * (-math.log10(1e-14 / record.ka2) - math.log10(5.0e-3 / 0.075))
        assert math.isclose(solve_ph(record, 50.0), 14.0 - poh, abs_tol=1e-9)
        assert solve_ph(record, 50.0) == pytest.approx(10.01, abs=0.01)

    def test_triprotic_second_equivalence_is_ampholyte_mean(self, catalog):
        record = catalog[13]
        expected = 0.5 * (record.pka2 + record.pka3)
        assert math.isclose(solve_ph(record, 50.0), expected, abs_tol=1e-9)

    def test_triprotic_final_equivalence_is_conjugate_base(self, catalog):
        """PO₄³⁻ from 7.5e-3 mol NaOH in 100 cm^3, Kb = Kw/Ka3."""
        record = catalog[13]
        poh = 0.5 * (-math.log10(1e-14 / record.ka3) - math.log10(7.5e-3 / 0.100))
        assert math.isclose(solve_ph(record, 75.0), 14.0 - poh, abs_tol=1e-9)
        assert solve_ph(record, 75.0) == pytest.approx(12.61, abs=0.01)

    def test_excess_base_never_below_final_equivalence(self, catalog):
        record = catalog[13]
        assert solve_ph(record, 90.0) >= solve_ph(record, 75.0)

    @pytest.mark.parametrize("titration_id", [11, 12])
    def test_continuous_across_first_equivalence(self, catalog, titration_id):
        """Neighbouring buffer branches meet the ampholyte pH from both sides."""
        record = catalog[titration_id]
        veq = record.equivalence_volumes[0]
        at_eq = solve_ph(record, veq)
        assert solve_ph(record, veq - 0.01) == pytest.approx(at_eq, abs=1e-9)
        assert solve_ph(record, veq + 0.01) == pytest.approx(at_eq, abs=1e-9)

    def test_triprotic_stays_below_fourteen(self, catalog):
        phs = [p.ph for p in sample_curve(catalog[13])]
        assert max(phs) < 14.0

    def test_regime_names(self, catalog):
        record = catalog[11]
        assert regime_name(record, 0.0) == "initial"
        assert regime_name(record, 10.0) == "buffer_1"
        assert regime_name(record, 12.5) == "half_equivalence_1"
        assert regime_name(record, 20.0) == "approach_1"
        assert regime_name(record, 25.0) == "equivalence_1"
        assert regime_name(record, 37.5) == "half_equivalence_2"
        assert regime_name(record, 50.0) == "equivalence_2"
        assert regime_name(record, 60.0) == "excess_titrant"


class TestCurveShape:
    """Invariants over whole sampled curves."""

    def test_every_catalog_curve_is_monotone(self, catalog):
        """Adding base never lowers pH; adding acid never raises it."""
        for record in catalog.values():
            phs = np.array([p.ph for p in sample_curve(record)])
            steps = np.diff(phs)
            if record.topology is Topology.STRONG_WEAK:
                steps = -steps
            assert np.all(steps >= -1e-9), f"titration {record.id} not monotone"

    def test_every_catalog_curve_is_within_ph_scale(self, catalog):
        for record in catalog.values():
            phs = [p.ph for p in sample_curve(record)]
            assert 0.0 <= min(phs) and max(phs) <= 14.0

    @pytest.mark.parametrize("titration_id", [1, 2, 5, 9])
    def test_steepest_near_equivalence(self, catalog, titration_id):
        record = catalog[titration_id]
        veq = record.equivalence_volumes[0]
        near = abs(solve_ph(record, veq - 0.01) - solve_ph(record, veq + 0.01))
        wide = abs(solve_ph(record, veq - 5.0) - solve_ph(record, veq + 5.0))
        assert near > wide / 500.0

    def test_pure_function(self, catalog):
        record = catalog[13]
        assert solve_ph(record, 33.3) == solve_ph(record, 33.3)


class TestFailureModes:
    """Invalid arguments raise the documented exceptions."""

    def test_negative_volume_raises(self, catalog):
        with pytest.raises(PreconditionViolation, match="cannot be negative"):
            solve_ph(catalog[1], -0.5)

    def test_non_finite_volume_raises(self, catalog):
        with pytest.raises(PreconditionViolation, match="must be finite"):
            solve_ph(catalog[1], math.nan)

    def test_non_numeric_volume_raises(self, catalog):
        with pytest.raises(TypeError, match="must be numeric"):
            solve_ph(catalog[1], "10")

    def test_unknown_record_type_raises(self):
        with pytest.raises(UnreachableTopology, match="No equilibrium model"):
            solve_ph(object(), 1.0)

    def test_unknown_record_is_type_error(self):
        with pytest.raises(TypeError):
            solve_ph("strong-strong", 1.0)

    def test_log_of_zero_raises_domain_error(self):
        with pytest.raises(DomainError):
            weak_acid_ph(0.0, 0.1)

    def test_empty_buffer_raises_domain_error(self):
        with pytest.raises(DomainError, match="buffer ratio"):
            henderson_hasselbalch(4.74, 0.0, 1.0)
