"""
Local size fallback.
Picks a garment size from chest circumference when no remote recommendation is available.
"""
from typing import Mapping, Optional, Tuple
import math

from anthropometry import config as anthro_cfg

# Upper chest bound (cm, exclusive) per size; anything above the last bound is LARGEST_SIZE
SIZE_THRESHOLDS = [('XS', 90.0), ('S', 95.0), ('M', 100.0), ('L', 105.0)]
LARGEST_SIZE = 'XL'
BASE_CONFIDENCE = 85


def calculate_size(measurements: Mapping[str, Optional[float]], gender: str = 'male') -> Tuple[str, int]:
    """
    Size from chest circumference.
    Args:
        measurements (dict): e.g., {'chest': 98, 'waist': 84, ...}; chest may be missing
        gender (str): selects the chest limits used for clamping
    Returns:
        size (str): one of XS, S, M, L, XL
        confidence (int): fixed confidence percentage
    """
    low, high = anthro_cfg.limits_for('chest', gender)
    chest = measurements.get('chest')
    if chest is None or (isinstance(chest, float) and math.isnan(chest)):
        chest = (low + high) / 2
    chest = min(max(float(chest), low), high)

    for size, bound in SIZE_THRESHOLDS:
        if chest < bound:
            return size, BASE_CONFIDENCE
    return LARGEST_SIZE, BASE_CONFIDENCE
