"""
Anthropometry configuration.
Edit values here to change bounds and defaults without touching the estimation code.
"""
from pathlib import Path
from typing import Dict, Tuple
import os

# Reference dataset location (male.csv / female.csv). Override with BODYFIT_DATA_DIR.
DATA_DIR: Path = Path(os.environ.get('BODYFIT_DATA_DIR') or Path(__file__).resolve().parent / 'data')

GENDERS: Tuple[str, ...] = ('male', 'female')
BODY_MEASUREMENTS: Tuple[str, ...] = ('chest', 'waist', 'hips')

# Absolute anatomical bounds (cm) per gender for the adjustable body sliders
MEASUREMENT_LIMITS: Dict[str, Dict[str, Tuple[float, float]]] = {
    'male': {
        'chest': (61.0, 170.6),
        'waist': (41.5, 154.5),
        'hips': (81.1, 159.5),
    },
    'female': {
        'chest': (61.0, 150.0),
        'waist': (41.5, 140.0),
        'hips': (73.0, 137.0),
    },
}

HEIGHT_LIMITS: Tuple[float, float] = (137.0, 210.0)   # cm
WEIGHT_LIMITS: Tuple[float, float] = (40.0, 150.0)    # kg

# Starting height/weight used when a session is opened without user input
DEFAULT_HEIGHT_WEIGHT: Dict[str, Tuple[float, float]] = {
    'male': (175.0, 70.0),
    'female': (165.0, 60.0),
}

# Unit conversion
CM_PER_FOOT: float = 30.48
CM_PER_INCH: float = 2.54
LBS_PER_KG: float = 2.20462

# Coefficients (height, weight) of the closed-form estimate used for unknown genders
FALLBACK_COEFFICIENTS: Dict[str, Tuple[float, float]] = {
    'chest': (0.53, 0.18),
    'waist': (0.42, 0.22),
    'hips': (0.54, 0.26),
    'inseam': (0.45, 0.10),
}


def limits_for(measurement: str, gender: str) -> Tuple[float, float]:
    """Return (absolute_min, absolute_max) for a body measurement.

    Height and weight share one set of bounds across genders; unknown genders
    use the male chest/waist/hips bounds.
    """
    if measurement == 'height':
        return HEIGHT_LIMITS
    if measurement == 'weight':
        return WEIGHT_LIMITS
    if measurement not in BODY_MEASUREMENTS:
        raise ValueError(f"Unknown measurement: {measurement}")
    key = gender.lower() if isinstance(gender, str) else ''
    return MEASUREMENT_LIMITS.get(key, MEASUREMENT_LIMITS['male'])[measurement]
