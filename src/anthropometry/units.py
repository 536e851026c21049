"""
Unit conversion and rounding helpers.

The widget collects values in metric or imperial units; the engine itself
only ever sees cm/kg floats. These helpers sit at that boundary.
"""
from typing import Dict
import math

from . import config as cfg


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties going up (172.5 -> 173); round() would give 172."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def cm_to_feet(cm: float) -> str:
    feet = cm / cfg.CM_PER_FOOT
    whole_feet = math.floor(feet)
    inches = int(round_half_up((feet - whole_feet) * 12))
    if inches == 12:
        whole_feet, inches = whole_feet + 1, 0
    return f"{whole_feet}'{inches}\""


def feet_to_cm(feet: str) -> float:
    """Parse a 5'11" style string into whole centimetres."""
    ft, _, inches = feet.partition("'")
    inches = inches.strip().rstrip('"') or '0'
    total_inches = int(ft) * 12 + int(inches)
    return round_half_up(total_inches * cfg.CM_PER_INCH)


def kg_to_lbs(kg: float) -> float:
    return round_half_up(kg * cfg.LBS_PER_KG)


def lbs_to_kg(lbs: float) -> float:
    return round_half_up(lbs / cfg.LBS_PER_KG)


def display_range(measurement: str, use_metric: bool, absolute_min: float, absolute_max: float) -> Dict[str, float]:
    """Slider bounds and step expressed in the display unit.

    Height and weight step by whole units; body measurements by half units.
    """
    step = 1 if measurement in ('height', 'weight') else 0.5
    if use_metric:
        return {'min': absolute_min, 'max': absolute_max, 'step': step}
    if measurement == 'weight':
        return {
            'min': round_half_up(absolute_min * cfg.LBS_PER_KG),
            'max': round_half_up(absolute_max * cfg.LBS_PER_KG),
            'step': step,
        }
    return {
        'min': round_half_up(absolute_min / cfg.CM_PER_INCH),
        'max': round_half_up(absolute_max / cfg.CM_PER_INCH),
        'step': step,
    }


def format_value(value: float, measurement: str, use_metric: bool) -> str:
    if not use_metric:
        if measurement == 'height':
            return cm_to_feet(value)
        if measurement == 'weight':
            return f"{value * cfg.LBS_PER_KG:.0f} lbs"
        return f"{value / cfg.CM_PER_INCH:.1f}\""
    unit = 'kg' if measurement == 'weight' else 'cm'
    return f"{value:.0f} {unit}"
