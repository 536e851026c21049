"""
Named morph targets handed to the renderer.

Shape-key axes map onto the avatar's morph targets, plus a few targets that
follow another one:
 - Shoulder Width / Belly Size follow Chest Width / Waist Thickness at a fixed ratio
 - male_skinny is the negation of male_overweight
 - Breast Size has a per-gender constant
Every value leaving this module is clamped to [MORPH_MIN, MORPH_MAX].
"""
from typing import Dict, Mapping

from . import config as cfg


def clamp_morph(value: float) -> float:
    return min(max(value, cfg.MORPH_MIN), cfg.MORPH_MAX)


def weight_target(gender: str) -> str:
    key = gender.lower() if isinstance(gender, str) else ''
    return cfg.WEIGHT_TARGETS.get(key, cfg.WEIGHT_TARGETS['male'])


def target_for_axis(axis: str, gender: str) -> str:
    if axis == 'kilo':
        return weight_target(gender)
    try:
        return cfg.SHAPE_KEY_TARGETS[axis]
    except KeyError:
        raise ValueError(f"No morph target for shape-key axis: {axis}")


def apply_morph(weights: Dict[str, float], name: str, value: float) -> Dict[str, float]:
    """Set one morph target (clamped) and update every target that follows it."""
    value = clamp_morph(value)
    weights[name] = value
    for follower, (leader, ratio) in cfg.COUPLED_TARGETS.items():
        if leader == name:
            weights[follower] = clamp_morph(value * ratio)
    for mirror, leader in cfg.MIRRORED_TARGETS.items():
        if leader == name:
            weights[mirror] = clamp_morph(-value)
    return weights


def morph_weights(shape_keys: Mapping[str, float], gender: str) -> Dict[str, float]:
    """Translate {boy, kilo, chest, waist, hips} into named morph weights."""
    weights: Dict[str, float] = {}
    for axis, value in shape_keys.items():
        apply_morph(weights, target_for_axis(axis, gender), value)
    key = gender.lower() if isinstance(gender, str) else ''
    weights['Breast Size'] = cfg.BREAST_SIZE_DEFAULTS.get(key, cfg.BREAST_SIZE_DEFAULTS['male'])
    return weights
