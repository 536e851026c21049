import io
import sys
from pathlib import Path

import pytest

here = Path(__file__).resolve().parent.parent / 'src' / 'morphing'
sys.path.insert(0, str(here.parent))

from morphing import config
from morphing.shape_keys import (
    AXES,
    ShapeKeyBreakpoint,
    ShapeKeyStore,
    ShapeKeyTable,
    calculate_shape_keys,
    resolve_axis,
    weight_for,
)

CHEST = ShapeKeyTable.from_mapping({'chest': {90: -0.5, 100: 0.0, 110: 0.5}})
STORE = ShapeKeyStore()


def test_interpolates_between_breakpoints():
    assert CHEST.weight_for('chest', 105) == 0.25


def test_value_is_rounded_before_lookup():
    assert CHEST.weight_for('chest', 104.6) == 0.25
    assert CHEST.weight_for('chest', 99.5) == 0.0


def test_out_of_table_values_clamp_to_edges():
    assert CHEST.weight_for('chest', 40) == -0.5
    assert CHEST.weight_for('chest', 89.4) == -0.5
    assert CHEST.weight_for('chest', 250) == 0.5


def test_interpolated_weight_has_three_decimals():
    table = ShapeKeyTable.from_mapping({'hips': {0: 0.0, 3: 1.0}})
    assert table.weight_for('hips', 1) == 0.333
    assert table.weight_for('hips', 2) == 0.667


def test_measurement_names_resolve_to_axes():
    assert resolve_axis('height') == 'boy'
    assert resolve_axis('weight') == 'kilo'
    assert resolve_axis('kilo') == 'kilo'
    with pytest.raises(ValueError):
        resolve_axis('neck')


def test_axis_without_breakpoints_weighs_zero():
    assert CHEST.weight_for('waist', 80) == 0.0


def test_duplicate_breakpoints_keep_the_last():
    table = ShapeKeyTable({'chest': [ShapeKeyBreakpoint(100, 0.1), ShapeKeyBreakpoint(100, 0.2)]})
    assert table.breakpoints('chest') == (ShapeKeyBreakpoint(100.0, 0.2),)


@pytest.mark.parametrize('gender', ['male', 'female'])
@pytest.mark.parametrize('axis', AXES)
def test_breakpoints_are_returned_exactly(gender, axis):
    table = STORE.table(gender)
    points = table.breakpoints(axis)
    assert points
    for point in points:
        assert table.weight_for(axis, point.value) == point.weight


@pytest.mark.parametrize('gender', ['male', 'female'])
@pytest.mark.parametrize('axis', AXES)
def test_interpolation_stays_between_neighbours(gender, axis):
    table = STORE.table(gender)
    points = table.breakpoints(axis)
    for lower, upper in zip(points, points[1:]):
        low_w, high_w = sorted((lower.weight, upper.weight))
        previous = None
        for value in range(int(lower.value), int(upper.value) + 1):
            weight = table.weight_for(axis, value)
            assert low_w - 1e-9 <= weight <= high_w + 1e-9
            if previous is not None:
                if upper.weight >= lower.weight:
                    assert weight >= previous
                else:
                    assert weight <= previous
            previous = weight


def test_store_picks_table_by_gender():
    assert ShapeKeyStore.table_key('Female') == 'female'
    assert ShapeKeyStore.table_key('male') == 'male'
    assert ShapeKeyStore.table_key('other') == 'male'
    store = ShapeKeyStore()
    assert store.table('other') is store.table('male')
    assert store.table('female') is not store.table('male')


def test_store_reset_reloads(tmp_path):
    (tmp_path / 'male_shapekeys.csv').write_text("category,key,value\nchest,100,0.0\nchest,110,0.4\n")
    store = ShapeKeyStore(tmp_path)
    first = store.table('male')
    assert store.is_loaded('male')
    store.reset()
    assert not store.is_loaded('male')
    assert store.table('male') is not first
    with pytest.raises(FileNotFoundError):
        store.table('female')


def test_store_uses_configured_directory(tmp_path, monkeypatch):
    (tmp_path / 'female_shapekeys.csv').write_text("category,key,value\nhips,100,0.25\n")
    monkeypatch.setattr(config, 'SHAPEKEY_DIR', tmp_path)
    assert weight_for('hips', 100, 'female', ShapeKeyStore()) == 0.25


def test_csv_parse_skips_malformed_rows():
    table = ShapeKeyTable.from_csv(io.StringIO(
        "category,key,value\n"
        "waist,80,0.0\n"
        "waist,eighty,0.5\n"
        "waist,90\n"
        "Waist,100,0.6\n"
    ))
    assert table.breakpoints('waist') == (ShapeKeyBreakpoint(80.0, 0.0), ShapeKeyBreakpoint(100.0, 0.6))


def test_csv_missing_columns_raises():
    with pytest.raises(ValueError):
        ShapeKeyTable.from_csv(io.StringIO("axis,value\nchest,1\n"))


def test_calculate_shape_keys_returns_every_axis():
    store = ShapeKeyStore.from_tables({'male': CHEST})
    keys = calculate_shape_keys(175, 70, 105, 80, 100, 'male', store)
    assert set(keys) == {'boy', 'kilo', 'chest', 'waist', 'hips'}
    assert keys['chest'] == 0.25
    assert keys['boy'] == 0.0


def test_default_tables_give_expected_male_weights():
    keys = calculate_shape_keys(175, 70, 95.8, 84.8, 99.0, 'male', STORE)
    assert keys == {'boy': 0.0, 'kilo': 0.0, 'chest': -0.2, 'waist': 0.15, 'hips': -0.06}
