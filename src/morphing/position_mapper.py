"""
Slider position to morph weight, anchored on the baseline.

The baseline measurement rarely sits in the middle of its slider, and its
shape-key weight rarely sits in the middle of the morph budget. The mapper
splits the budget around the baseline in proportion to how much slider
travel lies on each side of it:

    range_below = budget * p_baseline
    range_above = budget * (1 - p_baseline)
    morph(p)    = (w_baseline - range_below) + p * budget

so moving the handle back onto the baseline position always lands on the
baseline's own shape-key weight.
"""
from dataclasses import dataclass
from typing import Optional
import logging

from . import config as cfg
from .shape_keys import ShapeKeyStore, weight_for
from .slider_range import SliderRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MorphRange:
    min: float
    max: float
    range_below: float
    range_above: float

    @property
    def total(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class MorphMapping:
    morph_value: float
    morph_range: MorphRange
    slider_position: float
    baseline_position: float
    is_at_baseline: bool


def total_range_for(measurement: Optional[str]) -> float:
    if measurement is None:
        return cfg.DEFAULT_MORPH_RANGE
    return cfg.MORPH_RANGES.get(measurement, cfg.DEFAULT_MORPH_RANGE)


def morph_range(baseline_position: float, baseline_weight: float = 0.0,
                total_range: Optional[float] = None) -> MorphRange:
    if total_range is None:
        total_range = cfg.DEFAULT_MORPH_RANGE
    range_below = total_range * baseline_position
    range_above = total_range * (1 - baseline_position)
    return MorphRange(
        min=baseline_weight - range_below,
        max=baseline_weight + range_above,
        range_below=range_below,
        range_above=range_above,
    )


def morph_from_position(slider_position: float, baseline_position: float, baseline_weight: float = 0.0,
                        total_range: Optional[float] = None,
                        epsilon: Optional[float] = None) -> MorphMapping:
    """Morph weight for a normalized slider position (0..1)."""
    if total_range is None:
        total_range = cfg.DEFAULT_MORPH_RANGE
    if epsilon is None:
        epsilon = cfg.BASELINE_EPSILON
    bounds = morph_range(baseline_position, baseline_weight, total_range)
    # same line as bounds.min + slider_position * total_range, measured from the baseline
    morph_value = baseline_weight + (slider_position - baseline_position) * total_range
    return MorphMapping(
        morph_value=morph_value,
        morph_range=bounds,
        slider_position=slider_position,
        baseline_position=baseline_position,
        is_at_baseline=abs(slider_position - baseline_position) < epsilon,
    )


def morph_for_measurement(measurement: str, value: float, baseline: float, slider: SliderRange,
                          gender: str, store: Optional[ShapeKeyStore] = None) -> MorphMapping:
    """Full per-slider pipeline for chest, waist or hips.

    Args:
        measurement: 'chest', 'waist' or 'hips'
        value: the value the shopper dragged the slider to
        baseline: the estimated value for this measurement
        slider: the slider's current range
        gender: selects the shape-key table
    """
    baseline_weight = weight_for(measurement, baseline, gender, store)
    mapping = morph_from_position(
        slider.position_of(value),
        slider.position_of(baseline),
        baseline_weight,
        total_range_for(measurement),
    )
    logger.debug(f"{measurement}: {value} (baseline {baseline}) -> {mapping.morph_value:.3f}")
    return mapping
