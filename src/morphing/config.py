"""
Morph-mapping configuration.
Slider span and morph budgets were chosen empirically for the avatar models;
keep them here so product tuning never reaches into the algorithms.
"""
from pathlib import Path
from typing import Dict, Tuple
import os

# Shape-key tables (male_shapekeys.csv / female_shapekeys.csv). Override with BODYFIT_SHAPEKEY_DIR.
SHAPEKEY_DIR: Path = Path(os.environ.get('BODYFIT_SHAPEKEY_DIR') or Path(__file__).resolve().parent / 'data')

# Total numeric width of a body slider (cm)
SLIDER_SPAN: float = 12.0
SLIDER_STEP_COUNT: int = 12

# Morph-weight budget spread across a full slider, per body axis
MORPH_RANGES: Dict[str, float] = {
    'chest': 1.0,
    'waist': 1.0,
    'hips': 1.0,
}
DEFAULT_MORPH_RANGE: float = 1.0

# Slider positions closer than this count as "at the baseline"
BASELINE_EPSILON: float = 0.001

SHAPE_KEY_DECIMALS: int = 3

# Influence bounds accepted by the renderer
MORPH_MIN: float = -2.0
MORPH_MAX: float = 3.0

# shape-key axis -> morph target; 'kilo' is resolved per gender
SHAPE_KEY_TARGETS: Dict[str, str] = {
    'boy': 'height_200',
    'chest': 'Chest Width',
    'waist': 'Waist Thickness',
    'hips': 'Hips Size',
}
WEIGHT_TARGETS: Dict[str, str] = {
    'male': 'male_overweight',
    'female': 'female_overweight',
}

# Targets driven as a fixed fraction of another target rather than by their own table.
# Observed behaviour of the avatar models; not backed by an independent shape-key axis.
COUPLED_TARGETS: Dict[str, Tuple[str, float]] = {
    'Shoulder Width': ('Chest Width', 0.8),
    'Belly Size': ('Waist Thickness', 0.8),
}

# male_skinny is always the negation of male_overweight
MIRRORED_TARGETS: Dict[str, str] = {
    'male_skinny': 'male_overweight',
}

BREAST_SIZE_DEFAULTS: Dict[str, float] = {
    'male': 0.0,
    'female': 0.5,
}
