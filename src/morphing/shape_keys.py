"""
Shape-key tables and interpolation.

A shape-key table maps a measurement value to the deformation weight of a
morph target, per gender and per axis:

    boy   -> body height (cm)
    kilo  -> body weight (kg)
    chest, waist, hips -> circumference (cm)

Tables are stored as ``category,key,value`` CSV files and parsed once per
gender by a ``ShapeKeyStore``.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union
import logging

import numpy as np
import pandas as pd

from anthropometry.units import round_half_up

from . import config as cfg

logger = logging.getLogger(__name__)

AXES: Tuple[str, ...] = ('boy', 'kilo', 'chest', 'waist', 'hips')
MEASUREMENT_AXES: Dict[str, str] = {
    'height': 'boy',
    'weight': 'kilo',
    'chest': 'chest',
    'waist': 'waist',
    'hips': 'hips',
}


def resolve_axis(name: str) -> str:
    """Accept an axis name ('boy') or the measurement that drives it ('height')."""
    if name in AXES:
        return name
    if name in MEASUREMENT_AXES:
        return MEASUREMENT_AXES[name]
    raise ValueError(f"Unknown shape-key axis: {name}")


@dataclass(frozen=True)
class ShapeKeyBreakpoint:
    value: float
    weight: float


class ShapeKeyTable:
    """Breakpoints for every axis of one gender's avatar."""

    def __init__(self, breakpoints: Mapping[str, Iterable[ShapeKeyBreakpoint]]):
        self._exact: Dict[str, Dict[float, float]] = {}
        self._values: Dict[str, np.ndarray] = {}
        self._weights: Dict[str, np.ndarray] = {}
        for axis, points in breakpoints.items():
            by_value: Dict[float, float] = {}
            for point in points:
                # later duplicates replace earlier ones
                by_value[float(point.value)] = float(point.weight)
            values = sorted(by_value)
            self._exact[axis] = by_value
            self._values[axis] = np.array(values, dtype=float)
            self._weights[axis] = np.array([by_value[v] for v in values], dtype=float)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[float, float]]) -> 'ShapeKeyTable':
        """Build from ``{'chest': {90: -0.5, 100: 0.0}, ...}``."""
        return cls({
            axis: [ShapeKeyBreakpoint(value, weight) for value, weight in points.items()]
            for axis, points in data.items()
        })

    @classmethod
    def from_csv(cls, source) -> 'ShapeKeyTable':
        df = pd.read_csv(source, on_bad_lines='skip', skipinitialspace=True)
        df.columns = [str(c).strip().lower() for c in df.columns]
        missing = [c for c in ('category', 'key', 'value') if c not in df.columns]
        if missing:
            raise ValueError(f"Shape-key data is missing columns: {', '.join(missing)}")

        df['category'] = df['category'].astype(str).str.strip().str.lower()
        df['key'] = pd.to_numeric(df['key'], errors='coerce')
        df['value'] = pd.to_numeric(df['value'], errors='coerce')
        valid = df.dropna(subset=['key', 'value'])
        skipped = len(df) - len(valid)
        if skipped:
            logger.warning(f"Skipped {skipped} malformed shape-key rows")

        points: Dict[str, list] = {}
        for category, key, value in valid[['category', 'key', 'value']].itertuples(index=False, name=None):
            points.setdefault(category, []).append(ShapeKeyBreakpoint(float(key), float(value)))
        return cls(points)

    def axes(self) -> Tuple[str, ...]:
        return tuple(self._exact)

    def breakpoints(self, axis: str) -> Tuple[ShapeKeyBreakpoint, ...]:
        axis = resolve_axis(axis)
        if axis not in self._values:
            return ()
        return tuple(ShapeKeyBreakpoint(float(v), float(w))
                     for v, w in zip(self._values[axis], self._weights[axis]))

    def weight_for(self, axis: str, value: float) -> float:
        """Deformation weight for a measurement value on one axis.

        The value is rounded to a whole unit. Known breakpoints are returned
        as stored, values outside the table take the nearest edge weight, and
        anything in between is interpolated linearly and rounded to
        SHAPE_KEY_DECIMALS.
        """
        axis = resolve_axis(axis)
        values = self._values.get(axis)
        if values is None or len(values) == 0:
            logger.warning(f"No shape-key breakpoints for axis '{axis}'")
            return 0.0
        weights = self._weights[axis]

        rounded = round_half_up(value)
        exact = self._exact[axis].get(rounded)
        if exact is not None:
            return exact
        if rounded <= values[0]:
            return float(weights[0])
        if rounded >= values[-1]:
            return float(weights[-1])

        upper = int(np.searchsorted(values, rounded, side='right'))
        lower = upper - 1
        width = values[upper] - values[lower]
        t = 0.0 if width == 0 else (rounded - values[lower]) / width
        weight = weights[lower] + t * (weights[upper] - weights[lower])
        return round_half_up(float(weight), cfg.SHAPE_KEY_DECIMALS)


class ShapeKeyStore:
    """Per-gender shape-key tables, parsed on first use.

    The female table serves 'female'; every other gender uses the male one.
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else None
        self._tables: Dict[str, ShapeKeyTable] = {}

    @classmethod
    def from_tables(cls, tables: Mapping[str, ShapeKeyTable]) -> 'ShapeKeyStore':
        store = cls()
        store._tables.update({g.lower(): t for g, t in tables.items()})
        return store

    @staticmethod
    def table_key(gender: str) -> str:
        return 'female' if isinstance(gender, str) and gender.lower() == 'female' else 'male'

    def path_for(self, key: str) -> Path:
        return (self.data_dir or cfg.SHAPEKEY_DIR) / f"{key}_shapekeys.csv"

    def load(self, gender: Optional[str] = None) -> None:
        keys = [self.table_key(gender)] if gender else ['male', 'female']
        for key in keys:
            if key in self._tables:
                continue
            path = self.path_for(key)
            if not path.exists():
                raise FileNotFoundError(f"Shape-key table for '{key}' not found at {path}")
            table = ShapeKeyTable.from_csv(path)
            logger.info(f"Loaded {key} shape keys ({', '.join(table.axes())}) from {path}")
            self._tables[key] = table

    def reset(self) -> None:
        self._tables.clear()

    def is_loaded(self, gender: str) -> bool:
        return self.table_key(gender) in self._tables

    def table(self, gender: str) -> ShapeKeyTable:
        key = self.table_key(gender)
        if key not in self._tables:
            self.load(key)
        return self._tables[key]


_default_store = ShapeKeyStore()


def get_store() -> ShapeKeyStore:
    return _default_store


def weight_for(axis: str, value: float, gender: str, store: Optional[ShapeKeyStore] = None) -> float:
    if store is None:
        store = get_store()
    return store.table(gender).weight_for(axis, value)


def calculate_shape_keys(height: float, weight: float, chest: float, waist: float, hips: float,
                         gender: str, store: Optional[ShapeKeyStore] = None) -> Dict[str, float]:
    """Shape-key weights for a full measurement set, keyed boy/kilo/chest/waist/hips."""
    if store is None:
        store = get_store()
    table = store.table(gender)
    return {
        'boy': table.weight_for('boy', height),
        'kilo': table.weight_for('kilo', weight),
        'chest': table.weight_for('chest', chest),
        'waist': table.weight_for('waist', waist),
        'hips': table.weight_for('hips', hips),
    }
