"""
Live measurement state for one widget session.

A MeasurementSet is created once the shopper picks a gender. It is seeded
from the reference dataset and then follows two rules:
 - changing height or weight re-derives the baseline and re-seeds every
   body measurement the shopper has not touched
 - dragging a body slider pins that measurement as user-edited; later
   re-seeding only clamps it into the new slider range
"""
from typing import Dict, Optional, Set
import logging
import math

from anthropometry import config as anthro_cfg
from anthropometry.dataset import AnthropometricDataset
from anthropometry.estimator import BodyMeasurements, calculate_body_measurements, linear_estimate
from anthropometry.units import round_half_up
from morphing.morph_targets import apply_morph, morph_weights, target_for_axis
from morphing.position_mapper import MorphMapping, morph_for_measurement
from morphing.shape_keys import ShapeKeyStore, calculate_shape_keys
from morphing.slider_range import SliderRange, baseline_range, clamp_baseline

logger = logging.getLogger(__name__)


class MeasurementSet:
    def __init__(self, gender: str, height: Optional[float] = None, weight: Optional[float] = None,
                 dataset: Optional[AnthropometricDataset] = None, store: Optional[ShapeKeyStore] = None):
        self.gender = gender
        key = gender.lower() if isinstance(gender, str) else ''
        default_height, default_weight = anthro_cfg.DEFAULT_HEIGHT_WEIGHT.get(
            key, anthro_cfg.DEFAULT_HEIGHT_WEIGHT['male'])
        self._dataset = dataset
        self._store = store
        self.height = _clamp(height if height is not None else default_height, anthro_cfg.HEIGHT_LIMITS)
        self.weight = _clamp(weight if weight is not None else default_weight, anthro_cfg.WEIGHT_LIMITS)
        self.user_edited: Set[str] = set()
        self.values: Dict[str, float] = {}
        self.baseline: Optional[BodyMeasurements] = None
        self._reseed()

    def __getitem__(self, name: str) -> float:
        if name == 'height':
            return self.height
        if name == 'weight':
            return self.weight
        return self.values[_check_measurement(name)]

    def as_dict(self) -> Dict[str, float]:
        return {'height': self.height, 'weight': self.weight, **self.values}

    def baseline_value(self, name: str) -> float:
        """The estimated value for chest/waist/hips, clamped into its anatomical limits."""
        return clamp_baseline(name, getattr(self.baseline, _check_measurement(name)), self.gender)

    def slider_range(self, name: str) -> SliderRange:
        return baseline_range(name, self.baseline_value(name), self.gender)

    def set_height_weight(self, height: Optional[float] = None, weight: Optional[float] = None) -> None:
        if height is not None:
            self.height = _clamp(height, anthro_cfg.HEIGHT_LIMITS)
        if weight is not None:
            self.weight = _clamp(weight, anthro_cfg.WEIGHT_LIMITS)
        self._reseed()

    def set_measurement(self, name: str, value: float) -> MorphMapping:
        """Apply a slider drag; the value is clamped into the slider range."""
        name = _check_measurement(name)
        self.values[name] = self.slider_range(name).clamp(value)
        self.user_edited.add(name)
        return self.morph_mapping(name)

    def reset_measurement(self, name: str) -> None:
        name = _check_measurement(name)
        self.user_edited.discard(name)
        self.values[name] = self.baseline_value(name)

    def morph_mapping(self, name: str) -> MorphMapping:
        name = _check_measurement(name)
        return morph_for_measurement(name, self.values[name], self.baseline_value(name),
                                     self.slider_range(name), self.gender, self._store)

    def shape_keys(self) -> Dict[str, float]:
        return calculate_shape_keys(self.height, self.weight, self.values['chest'],
                                    self.values['waist'], self.values['hips'], self.gender, self._store)

    def morph_weights(self) -> Dict[str, float]:
        """Named morph weights for the renderer.

        Height and weight use the plain shape-key lookup; user-edited body
        measurements go through the baseline-anchored slider mapping.
        """
        weights = morph_weights(self.shape_keys(), self.gender)
        for name in sorted(self.user_edited):
            apply_morph(weights, target_for_axis(name, self.gender), self.morph_mapping(name).morph_value)
        return weights

    def _reseed(self) -> None:
        baseline = calculate_body_measurements(self.height, self.weight, self.gender, self._dataset)
        if baseline is None:
            if self.baseline is not None:
                logger.warning("Baseline lookup returned nothing; keeping previous baseline")
                return
            baseline = linear_estimate(round_half_up(self.height), round_half_up(self.weight))
        self.baseline = baseline

        for name in anthro_cfg.BODY_MEASUREMENTS:
            if name in self.user_edited:
                self.values[name] = self.slider_range(name).clamp(self.values[name])
            else:
                self.values[name] = self.baseline_value(name)
        logger.debug(f"Re-seeded {self.gender} measurements at {self.height}cm/{self.weight}kg: {self.values}")


def _check_measurement(name: str) -> str:
    if name not in anthro_cfg.BODY_MEASUREMENTS:
        raise ValueError(f"Not an adjustable body measurement: {name}")
    return name


def _clamp(value: float, limits) -> float:
    if math.isnan(value):
        raise ValueError("Measurement must be a number")
    low, high = limits
    return min(max(float(value), low), high)
