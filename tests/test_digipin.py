import math
import re

import pytest

from digipin_api.digipin import (
    CHAR_TO_INDEX,
    DIGIPIN_GRID,
    BoundingBox,
    Coordinate,
    DecodedDigipin,
    InvalidCode,
    ROOT_BOUNDS,
    OutOfBound,
    decode_digipin,
    get_bounds_from_digipin,
    get_digipin,
    get_lat_lng_from_digipin,
    round_coordinate,
)

DIGIPIN_PATTERN = re.compile(r"^[FCJKLMPT2-9]{3}-[FCJKLMPT2-9]{3}-[FCJKLMPT2-9]{4}$")


def test_grid_has_sixteen_distinct_symbols():
    symbols = [char for row in DIGIPIN_GRID for char in row]
    assert len(set(symbols)) == 16
    assert len(CHAR_TO_INDEX) == 16
    for char, (r, c) in CHAR_TO_INDEX.items():
        assert DIGIPIN_GRID[r][c] == char


def test_encode_returns_grouped_code():
    result = get_digipin(20, 80)
    assert isinstance(result, str)
    assert DIGIPIN_PATTERN.match(result)


@pytest.mark.parametrize(
    "lat, lon",
    [(1, 80), (40, 80), (20, 60), (20, 100), (10 ** 400, 80), (20, -10 ** 400)],
)
def test_encode_out_of_bound(lat, lon):
    result = get_digipin(lat, lon)
    assert isinstance(result, OutOfBound)
    assert result == OutOfBound(latitude=lat, longitude=lon)


@pytest.mark.parametrize(
    "lat, lon",
    [(math.nan, 80), (20, math.nan), (math.inf, 80), (20, -math.inf)],
)
def test_encode_non_finite_is_out_of_bound(lat, lon):
    assert isinstance(get_digipin(lat, lon), OutOfBound)


def test_encode_north_east_corner_clamps_to_last_band():
    assert get_digipin(ROOT_BOUNDS.max_lat, ROOT_BOUNDS.max_lon) == "888-888-8888"


def test_encode_south_west_corner():
    assert get_digipin(ROOT_BOUNDS.min_lat, ROOT_BOUNDS.min_lon) == "LLL-LLL-LLLL"


def test_encode_ignores_noise_below_six_decimals():
    assert get_digipin(20.0000001, 80.0000001) == get_digipin(20, 80)


def test_decode_known_code():
    result = get_lat_lng_from_digipin("F3M-P6T-FCJK")
    assert isinstance(result, Coordinate)
    assert isinstance(result.latitude, float)
    assert isinstance(result.longitude, float)


def test_decode_accepts_code_without_hyphens():
    assert get_lat_lng_from_digipin("F3MP6TFCJK") == get_lat_lng_from_digipin("F3M-P6T-FCJK")


@pytest.mark.parametrize("digipin", ["ABC", "123-456-WXYZ", "", "F3M-P6T-FCJKL", "f3m-p6t-fcjk"])
def test_decode_rejects_malformed_input(digipin):
    result = decode_digipin(digipin)
    assert isinstance(result, InvalidCode)
    assert result.digipin == digipin


def test_decode_rejects_non_string():
    assert isinstance(decode_digipin(12345), InvalidCode)


def test_invalid_code_reason_names_bad_character():
    result = decode_digipin("F3M-P6T-FCJA")
    assert isinstance(result, InvalidCode)
    assert "'A'" in result.reason


def test_round_trip_from_coordinate():
    result = get_lat_lng_from_digipin(get_digipin(20, 80))
    assert result.latitude == pytest.approx(20, abs=0.1)
    assert result.longitude == pytest.approx(80, abs=0.1)


@pytest.mark.parametrize(
    "lat, lon",
    [(28.622788, 77.213033), (12.971599, 77.594566), (8.0883, 77.5385), (34.0837, 74.7973)],
)
def test_round_trip_lands_in_final_cell(lat, lon):
    bounds = get_bounds_from_digipin(get_digipin(lat, lon))
    assert bounds.contains(lat, lon)
    # Final cell is the root extent divided by 4**10 in each axis
    assert bounds.max_lat - bounds.min_lat == pytest.approx(36 / 4 ** 10)
    assert bounds.max_lon - bounds.min_lon == pytest.approx(36 / 4 ** 10)


@pytest.mark.parametrize(
    "digipin",
    ["F3M-P6T-FCJK", "888-888-8888", "LLL-LLL-LLLL", "39J-438-TJC7", "4P3-JK8-52C9", "FCF-CFC-FCFC"],
)
def test_round_trip_from_code(digipin):
    coordinate = get_lat_lng_from_digipin(digipin)
    assert get_digipin(coordinate.latitude, coordinate.longitude) == digipin


def test_decode_centroid_inside_bounds():
    decoded = decode_digipin("39J-438-TJC7")
    assert isinstance(decoded, DecodedDigipin)
    assert decoded.bounds.contains(decoded.latitude, decoded.longitude)
    assert decoded.latitude == round_coordinate((decoded.bounds.min_lat + decoded.bounds.max_lat) / 2)
    assert decoded.longitude == round_coordinate((decoded.bounds.min_lon + decoded.bounds.max_lon) / 2)


def test_decode_normalises_display_format():
    assert decode_digipin("F3MP6TFCJK").digipin == "F3M-P6T-FCJK"


def test_first_symbol_selects_root_quadrant():
    bounds = get_bounds_from_digipin("FFF-FFF-FFFF")
    assert isinstance(bounds, BoundingBox)
    # F is the north-west cell at every level
    assert bounds.max_lat == ROOT_BOUNDS.max_lat
    assert bounds.min_lon == ROOT_BOUNDS.min_lon


def test_bounds_accessor_propagates_invalid_code():
    assert isinstance(get_bounds_from_digipin("ABC"), InvalidCode)


@pytest.mark.parametrize(
    "value, expected",
    [(20.0, 20.0), (1.0000005, 1.000001), (-1.0000005, -1.000001), (77.1234564, 77.123456)],
)
def test_round_coordinate_half_away_from_zero(value, expected):
    assert round_coordinate(value) == expected
