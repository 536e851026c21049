"""
Reference anthropometric dataset.

One CSV per gender (``male.csv``, ``female.csv``) with the columns
height, weight, chest, waist, hips, inseam (cm / kg). Files are parsed once
into immutable rows and kept for the lifetime of the dataset object;
``reset()`` drops the cache so the next lookup re-reads the files.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union
import logging
import threading

import numpy as np
import pandas as pd

from . import config as cfg

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('height', 'weight', 'chest', 'waist', 'hips')


@dataclass(frozen=True)
class AnthropometricRow:
    height: float
    weight: float
    chest: float
    waist: float
    hips: float
    inseam: float = 0.0


def parse_rows(source) -> Tuple[AnthropometricRow, ...]:
    """Parse a reference CSV (path or file-like) into rows.

    Rows with missing or non-numeric required fields are skipped; a missing
    inseam is read as 0.
    """
    df = pd.read_csv(source, on_bad_lines='skip', skipinitialspace=True)
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Reference data is missing columns: {', '.join(missing)}")
    if 'inseam' not in df.columns:
        df['inseam'] = 0.0

    columns = list(REQUIRED_COLUMNS) + ['inseam']
    numeric = df[columns].apply(pd.to_numeric, errors='coerce')
    numeric['inseam'] = numeric['inseam'].fillna(0.0)
    valid = numeric.dropna(subset=list(REQUIRED_COLUMNS))
    skipped = len(numeric) - len(valid)
    if skipped:
        logger.warning(f"Skipped {skipped} malformed reference rows")

    return tuple(
        AnthropometricRow(*(float(v) for v in record))
        for record in valid.itertuples(index=False, name=None)
    )


class AnthropometricDataset:
    """Lazily loaded, per-gender reference rows.

    Usage::

        dataset = AnthropometricDataset()
        rows = dataset.rows('male')      # parsed on first use
        dataset.reset()                  # forget everything
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else None
        self._rows: Dict[str, Tuple[AnthropometricRow, ...]] = {}
        self._matrices: Dict[str, np.ndarray] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_rows(cls, rows_by_gender: Dict[str, Iterable[AnthropometricRow]]) -> 'AnthropometricDataset':
        """Build a dataset that is already loaded from in-memory rows."""
        dataset = cls()
        for gender, rows in rows_by_gender.items():
            dataset._store(gender.lower(), tuple(rows))
        return dataset

    def path_for(self, gender: str) -> Path:
        return (self.data_dir or cfg.DATA_DIR) / f"{gender}.csv"

    def load(self, gender: Optional[str] = None) -> None:
        """Parse the reference file for one gender, or all of them."""
        genders = [gender.lower()] if gender else list(cfg.GENDERS)
        with self._lock:
            for g in genders:
                if g in self._rows:
                    continue
                path = self.path_for(g)
                if not path.exists():
                    raise FileNotFoundError(f"Reference data for gender '{g}' not found at {path}")
                rows = parse_rows(path)
                logger.info(f"Loaded {len(rows)} {g} reference rows from {path}")
                self._store(g, rows)

    def reset(self) -> None:
        with self._lock:
            self._rows.clear()
            self._matrices.clear()

    def is_loaded(self, gender: str) -> bool:
        return gender.lower() in self._rows

    def rows(self, gender: str) -> Tuple[AnthropometricRow, ...]:
        gender = gender.lower()
        if gender not in self._rows:
            self.load(gender)
        return self._rows[gender]

    def height_weight(self, gender: str) -> np.ndarray:
        """(N, 2) array of the rows' height and weight, in row order."""
        gender = gender.lower()
        if gender not in self._matrices:
            self.load(gender)
        return self._matrices[gender]

    def _store(self, gender: str, rows: Tuple[AnthropometricRow, ...]) -> None:
        matrix = np.array([(r.height, r.weight) for r in rows], dtype=float).reshape(-1, 2)
        matrix.setflags(write=False)
        # rows mark the gender as loaded, so they go in last
        self._matrices[gender] = matrix
        self._rows[gender] = rows


_default_dataset = AnthropometricDataset()


def get_dataset() -> AnthropometricDataset:
    """Process-wide dataset shared by the estimator."""
    return _default_dataset
