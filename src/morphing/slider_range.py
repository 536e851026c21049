"""
Slider ranges for the adjustable body measurements.

A body slider always spans SLIDER_SPAN units around the shopper's baseline.
When the baseline sits close to an anatomical limit the window slides
inward and keeps its span; only bounds narrower than the span produce a
shorter slider.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from anthropometry import config as anthro_cfg

from . import config as cfg


@dataclass(frozen=True)
class SliderRange:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def clamp(self, value: float) -> float:
        return min(max(value, self.min), self.max)

    def position_of(self, value: float) -> float:
        """Where value falls along the slider, 0 at min and 1 at max."""
        if self.span == 0:
            return 0.0
        return (value - self.min) / self.span


@dataclass(frozen=True)
class SliderConfig:
    range: SliderRange
    baseline: float
    steps: List[float] = field(default_factory=list)
    can_increase: bool = True
    can_decrease: bool = True


def range_for(baseline: float, absolute_min: float, absolute_max: float,
              span: Optional[float] = None) -> SliderRange:
    """Fixed-span window around baseline, kept inside [absolute_min, absolute_max]."""
    if span is None:
        span = cfg.SLIDER_SPAN
    ideal_min = baseline - span / 2
    ideal_max = baseline + span / 2

    if ideal_min >= absolute_min and ideal_max <= absolute_max:
        return SliderRange(ideal_min, ideal_max)
    if ideal_max > absolute_max:
        return SliderRange(max(absolute_min, absolute_max - span), absolute_max)
    return SliderRange(absolute_min, min(absolute_max, absolute_min + span))


def clamp_baseline(measurement: str, baseline: float, gender: str) -> float:
    absolute_min, absolute_max = anthro_cfg.limits_for(measurement, gender)
    return min(max(baseline, absolute_min), absolute_max)


def baseline_range(measurement: str, baseline: float, gender: str,
                   span: Optional[float] = None) -> SliderRange:
    """Slider range for chest/waist/hips using the gender's anatomical limits.

    The baseline is clamped into the limits first, so the result always
    contains the (clamped) baseline.
    """
    absolute_min, absolute_max = anthro_cfg.limits_for(measurement, gender)
    return range_for(clamp_baseline(measurement, baseline, gender), absolute_min, absolute_max, span)


def slider_config(baseline: float, absolute_min: float, absolute_max: float,
                  step_count: Optional[int] = None) -> SliderConfig:
    """Slider range plus evenly spaced step markers for tick rendering."""
    if step_count is None:
        step_count = cfg.SLIDER_STEP_COUNT
    slider = range_for(baseline, absolute_min, absolute_max)
    steps = [round(slider.min + i * slider.span / step_count, 2) for i in range(step_count + 1)]
    return SliderConfig(
        range=slider,
        baseline=baseline,
        steps=steps,
        can_increase=baseline < absolute_max,
        can_decrease=baseline > absolute_min,
    )
