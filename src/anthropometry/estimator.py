"""
Baseline body measurements from height and weight.

The baseline for a shopper is the reference row whose (height, weight) is
closest in Euclidean distance to theirs. Genders without a reference table
get a closed-form linear approximation instead of an error.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Optional
import logging

import numpy as np

from . import config as cfg
from .dataset import AnthropometricDataset, get_dataset
from .units import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BodyMeasurements:
    chest: float
    waist: float
    hips: float
    inseam: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def find_closest_index(height_weight: np.ndarray, height: float, weight: float) -> Optional[int]:
    """Index of the row nearest to (height, weight); the first row wins ties."""
    if len(height_weight) == 0:
        return None
    distances = np.hypot(height_weight[:, 0] - height, height_weight[:, 1] - weight)
    return int(np.argmin(distances))


def linear_estimate(height: float, weight: float) -> BodyMeasurements:
    """Approximate measurements from fixed height/weight coefficients."""
    values = {
        name: round_half_up(h_coef * height + w_coef * weight, 1)
        for name, (h_coef, w_coef) in cfg.FALLBACK_COEFFICIENTS.items()
    }
    return BodyMeasurements(**values)


def calculate_body_measurements(height_cm: float, weight_kg: float, gender: str,
                                dataset: Optional[AnthropometricDataset] = None) -> Optional[BodyMeasurements]:
    """Infer chest/waist/hips/inseam for a shopper.

    Args:
        height_cm: body height; rounded to a whole cm before searching
        weight_kg: body weight; rounded to a whole kg before searching
        gender: 'male' or 'female'; anything else uses the linear estimate
        dataset: reference data, defaults to the process-wide dataset

    Returns:
        BodyMeasurements, or None when the gender's reference table is empty.
    """
    height = round_half_up(height_cm)
    weight = round_half_up(weight_kg)
    key = gender.lower() if isinstance(gender, str) else ''

    if key not in cfg.GENDERS:
        logger.debug(f"No reference data for gender {gender!r}; using linear estimate")
        return linear_estimate(height, weight)

    if dataset is None:
        dataset = get_dataset()
    index = find_closest_index(dataset.height_weight(key), height, weight)
    if index is None:
        logger.warning(f"Reference data for {key} is empty")
        return None

    row = dataset.rows(key)[index]
    logger.debug(f"Closest {key} row to {height:.0f}cm/{weight:.0f}kg: {row}")
    return BodyMeasurements(chest=row.chest, waist=row.waist, hips=row.hips, inseam=row.inseam)
