"""Greedy plate loadout: pure function, no database."""
import unittest

import pytest

from liftlog.engine import PlateSpec, calculate, format_weight
from liftlog.models import Plate
from liftlog.models.enums import WeightUnit

STANDARD = [
    PlateSpec(45, 4, "blue"),
    PlateSpec(35, 2, "yellow"),
    PlateSpec(25, 2, "green"),
    PlateSpec(10, 4, "white"),
    PlateSpec(5, 4, "red"),
    PlateSpec(2.5, 4, "gray"),
]

class TestCalculate(unittest.TestCase):
    def test_one_plate_per_side(self):
        lo = calculate(135, 45, STANDARD)
        self.assertEqual([p.weight for p in lo.plates_per_side], [45])
        self.assertEqual(lo.plates_per_side[0].color, "blue")
        self.assertEqual(lo.total_weight, 135)
        self.assertTrue(lo.is_exact)
        self.assertAlmostEqual(lo.difference, 0.0)

    def test_fractional_plate(self):
        lo = calculate(140, 45, STANDARD)
        self.assertEqual([p.weight for p in lo.plates_per_side], [45, 2.5])
        self.assertEqual(lo.total_weight, 140)
        self.assertTrue(lo.is_exact)

    def test_bar_only(self):
        lo = calculate(45, 45, STANDARD)
        self.assertEqual(lo.plates_per_side, [])
        self.assertTrue(lo.is_exact)
        self.assertEqual(lo.summary(), "Bar only")

    def test_target_below_bar(self):
        lo = calculate(30, 45, STANDARD)
        self.assertEqual(lo.plates_per_side, [])
        self.assertEqual(lo.total_weight, 45)
        self.assertFalse(lo.is_exact)
        self.assertEqual(lo.difference, 15)

    def test_inexact_never_overshoots(self):
        lo = calculate(136, 45, STANDARD)
        self.assertFalse(lo.is_exact)
        self.assertEqual(lo.total_weight, 135)
        self.assertAlmostEqual(lo.difference, 1.0)
        self.assertLessEqual(lo.total_weight, 136)

    def test_pairs_are_limited_by_count(self):
        # one pair of 45s only, the rest must come from smaller plates
        plates = [PlateSpec(45, 2), PlateSpec(25, 4)]
        lo = calculate(235, 45, plates)
        self.assertEqual([p.weight for p in lo.plates_per_side], [45, 25, 25])
        self.assertEqual(lo.total_weight, 235)

    def test_odd_and_single_plates_ignored(self):
        plates = [PlateSpec(45, 1), PlateSpec(25, 3), PlateSpec(0, 10)]
        lo = calculate(145, 45, plates)
        self.assertEqual([p.weight for p in lo.plates_per_side], [25])
        self.assertFalse(lo.is_exact)
        self.assertAlmostEqual(lo.difference, 50.0)

    def test_plates_non_increasing(self):
        lo = calculate(402.5, 45, STANDARD)
        weights = [p.weight for p in lo.plates_per_side]
        self.assertEqual(weights, sorted(weights, reverse=True))
        self.assertLessEqual(lo.total_weight, 402.5)

    def test_unsorted_inventory(self):
        lo = calculate(185, 45, list(reversed(STANDARD)))
        self.assertEqual([p.weight for p in lo.plates_per_side], [45, 25])

    def test_orm_plates_accepted(self):
        plates = [Plate(weight=45.0, count=2, color="blue"), Plate(weight=10.0, count=2, color="white")]
        lo = calculate(155, 45, plates)
        self.assertEqual([(p.weight, p.color) for p in lo.plates_per_side], [(45.0, "blue"), (10.0, "white")])

def test_summary_groups_plates():
    lo = calculate(320, 45, STANDARD)
    # per side: 45 45 35 10 2.5
    assert lo.summary() == "2x45 + 1x35 + 1x10 + 1x2.5"

def test_format_weight():
    assert format_weight(45.0) == "45"
    assert format_weight(2.5) == "2.5"
    assert format_weight(142.25) == "142.2"

def test_weight_unit_convert():
    assert WeightUnit.lb.convert(100, WeightUnit.kg) == pytest.approx(45.3592)
    assert WeightUnit.kg.convert(20, WeightUnit.lb) == pytest.approx(44.0925, abs=1e-4)
    assert WeightUnit.kg.convert(20, WeightUnit.kg) == 20
