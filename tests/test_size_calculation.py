import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'src'))

from fit_model.size_calculation import BASE_CONFIDENCE, calculate_size


@pytest.mark.parametrize('chest, size', [
    (50, 'XS'),
    (89.9, 'XS'),
    (90, 'S'),
    (97.5, 'M'),
    (104.9, 'L'),
    (105, 'XL'),
    (200, 'XL'),
])
def test_size_from_chest(chest, size):
    assert calculate_size({'chest': chest, 'waist': 80}) == (size, BASE_CONFIDENCE)


def test_missing_chest_uses_midpoint_of_limits():
    # male chest limits 61..170.6 -> 115.8
    assert calculate_size({}, 'male') == ('XL', 85)
    assert calculate_size({'chest': None}, 'female')[0] == 'XL'
    assert calculate_size({'chest': float('nan')})[0] == 'XL'
