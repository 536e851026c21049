import sys
from pathlib import Path

import pytest

here = Path(__file__).resolve().parent.parent / 'src' / 'morphing'
sys.path.insert(0, str(here.parent))

from morphing import config
from morphing.position_mapper import morph_for_measurement, morph_from_position, morph_range, total_range_for
from morphing.shape_keys import ShapeKeyStore, ShapeKeyTable
from morphing.slider_range import SliderRange

STORE = ShapeKeyStore.from_tables({
    'male': ShapeKeyTable.from_mapping({'chest': {90: -0.5, 100: 0.0, 110: 0.5}}),
})


@pytest.mark.parametrize('position', [0.0, 0.1, 0.25, 1 / 3, 0.5, 0.75, 0.9, 1.0])
@pytest.mark.parametrize('weight', [-1.4, -0.2, 0.0, 0.333, 1.75])
def test_baseline_position_returns_baseline_weight(position, weight):
    mapping = morph_from_position(position, position, weight)
    assert mapping.morph_value == weight
    assert mapping.is_at_baseline


def test_centered_baseline_splits_budget_evenly():
    bounds = morph_range(0.5, 0.2)
    assert bounds.range_below == 0.5 and bounds.range_above == 0.5
    assert morph_from_position(0.0, 0.5, 0.2).morph_value == pytest.approx(-0.3)
    assert morph_from_position(1.0, 0.5, 0.2).morph_value == pytest.approx(0.7)


def test_baseline_near_top_gets_most_budget_below():
    bounds = morph_range(0.75, 0.0)
    assert bounds.range_below == pytest.approx(0.75)
    assert bounds.range_above == pytest.approx(0.25)
    assert (bounds.min, bounds.max) == pytest.approx((-0.75, 0.25))
    assert bounds.total == pytest.approx(1.0)
    assert morph_from_position(0.0, 0.75, 0.0).morph_value == pytest.approx(bounds.min)
    assert morph_from_position(1.0, 0.75, 0.0).morph_value == pytest.approx(bounds.max)


def test_value_follows_linear_formula():
    position, baseline = 0.4, 0.8
    bounds = morph_range(baseline, 0.1, total_range=2.0)
    expected = bounds.min + position * (bounds.max - bounds.min)
    mapping = morph_from_position(position, baseline, 0.1, total_range=2.0)
    assert mapping.morph_value == pytest.approx(expected)
    assert not mapping.is_at_baseline


def test_at_baseline_uses_epsilon():
    assert morph_from_position(0.5004, 0.5, 0.0).is_at_baseline
    assert not morph_from_position(0.502, 0.5, 0.0).is_at_baseline


def test_total_range_lookup():
    assert total_range_for('chest') == 1.0
    assert total_range_for(None) == 1.0
    assert total_range_for('inseam') == 1.0


def test_morph_for_measurement_uses_baseline_shape_key():
    slider = SliderRange(94, 106)
    at_top = morph_for_measurement('chest', 106, 100, slider, 'male', STORE)
    assert at_top.baseline_position == 0.5
    assert at_top.slider_position == 1.0
    assert at_top.morph_value == pytest.approx(0.5)

    at_baseline = morph_for_measurement('chest', 100, 100, slider, 'male', STORE)
    assert at_baseline.morph_value == 0.0
    assert at_baseline.is_at_baseline


def test_morph_for_measurement_with_asymmetric_range():
    # baseline 134 sits at 3/4 of a 125..137 slider
    store = ShapeKeyStore.from_tables({'female': ShapeKeyTable.from_mapping({'hips': {130: 1.0, 140: 1.2}})})
    slider = SliderRange(125, 137)
    mapping = morph_for_measurement('hips', 125, 134, slider, 'female', store)
    assert mapping.baseline_position == pytest.approx(0.75)
    assert mapping.morph_range.min == pytest.approx(1.08 - 0.75)
    assert mapping.morph_value == pytest.approx(1.08 - 0.75)


def test_config_changes_reach_default_budget_and_epsilon(monkeypatch):
    monkeypatch.setattr(config, 'DEFAULT_MORPH_RANGE', 2.0)
    monkeypatch.setattr(config, 'BASELINE_EPSILON', 0.01)
    mapping = morph_from_position(1.0, 0.5, 0.0)
    assert mapping.morph_value == pytest.approx(1.0)
    assert morph_range(0.5).total == pytest.approx(2.0)
    assert morph_from_position(0.505, 0.5, 0.0).is_at_baseline
