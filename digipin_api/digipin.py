import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

DIGIPIN_GRID = (
    ('F', 'C', '9', '8'),
    ('J', '3', '2', '7'),
    ('K', '4', '5', '6'),
    ('L', 'M', 'P', 'T'),
)

LEVELS = 10
SEPARATOR = '-'

# Built once from the grid; read-only for the lifetime of the process.
CHAR_TO_INDEX = {
    char: (r, c)
    for r, row_list in enumerate(DIGIPIN_GRID)
    for c, char in enumerate(row_list)
}

_SIX_PLACES = Decimal('0.000001')


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @property
    def lat_div(self) -> float:
        return (self.max_lat - self.min_lat) / 4

    @property
    def lon_div(self) -> float:
        return (self.max_lon - self.min_lon) / 4

    def contains(self, lat: float, lon: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon

    def center(self) -> Coordinate:
        return Coordinate(
            latitude=(self.min_lat + self.max_lat) / 2,
            longitude=(self.min_lon + self.max_lon) / 2,
        )


ROOT_BOUNDS = BoundingBox(min_lat=2.5, max_lat=38.5, min_lon=63.5, max_lon=99.5)


@dataclass(frozen=True)
class OutOfBound:
    """The coordinate is non-finite or outside the DIGIPIN region."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class InvalidCode:
    """The input could not be read as a 10-symbol DIGIPIN."""
    digipin: object
    reason: str


@dataclass(frozen=True)
class DecodedDigipin:
    """Centroid and final cell produced by a single decode pass."""
    digipin: str
    coordinate: Coordinate
    bounds: BoundingBox

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude


def round_coordinate(value: float) -> float:
    """
    Rounds a coordinate component to 6 decimal places, halves away from zero.

    The shortest repr of the float is rounded, so 0.0000005 becomes 0.000001
    regardless of how it is stored in binary.
    """
    return float(Decimal(repr(float(value))).quantize(_SIX_PLACES, rounding=ROUND_HALF_UP))


def format_digipin(symbols: str) -> str:
    """Groups 10 symbols as XXX-XXX-XXXX."""
    return SEPARATOR.join((symbols[:3], symbols[3:6], symbols[6:]))


def get_digipin(lat: float, lon: float) -> Union[str, OutOfBound]:
    """
    Encodes a latitude and longitude into a 10-digit alphanumeric DIGIPIN.

    Args:
        lat: The latitude coordinate.
        lon: The longitude coordinate.

    Returns:
        The formatted DIGIPIN string (e.g., "4P3-JK8-52C9"), or an
        OutOfBound result if either value is non-finite or outside ROOT_BOUNDS.
    """
    try:
        finite = math.isfinite(lat) and math.isfinite(lon)
    except OverflowError:
        # Integers too large for a float
        finite = False
    if not finite or not ROOT_BOUNDS.contains(lat, lon):
        return OutOfBound(latitude=lat, longitude=lon)

    lat = round_coordinate(lat)
    lon = round_coordinate(lon)

    box = ROOT_BOUNDS
    digipin_chars = []

    for _ in range(LEVELS):
        lat_div = box.lat_div
        lon_div = box.lon_div

        # Row 0 is the northmost band, so the row index counts down from 3
        row = 3 - math.floor((lat - box.min_lat) / lat_div)
        col = math.floor((lon - box.min_lon) / lon_div)

        # A point on the north or east edge lands one past the last band
        row = max(0, min(row, 3))
        col = max(0, min(col, 3))

        digipin_chars.append(DIGIPIN_GRID[row][col])

        new_min_lon = box.min_lon + lon_div * col
        box = BoundingBox(
            min_lat=box.min_lat + lat_div * (3 - row),
            max_lat=box.min_lat + lat_div * (4 - row),
            min_lon=new_min_lon,
            max_lon=new_min_lon + lon_div,
        )

    return format_digipin(''.join(digipin_chars))


def decode_digipin(digipin: str) -> Union[DecodedDigipin, InvalidCode]:
    """
    Decodes a DIGIPIN into its final grid cell and the centre of that cell.

    Args:
        digipin: The 10-character DIGIPIN string (hyphens are optional).

    Returns:
        A DecodedDigipin holding the centroid (rounded to 6 decimal places)
        and the unrounded bounding box, or an InvalidCode result if the input
        has the wrong length or contains a character outside the grid.
    """
    if not isinstance(digipin, str):
        return InvalidCode(digipin=digipin, reason='DIGIPIN must be a string.')

    pin = digipin.replace(SEPARATOR, '')
    if len(pin) != LEVELS:
        return InvalidCode(digipin=digipin, reason='Must contain 10 alphanumeric characters.')

    box = ROOT_BOUNDS

    for char in pin:
        index = CHAR_TO_INDEX.get(char)
        if index is None:
            return InvalidCode(digipin=digipin, reason=f"Invalid character '{char}' in DIGIPIN.")

        ri, ci = index
        lat_div = box.lat_div
        lon_div = box.lon_div

        # Latitude counts down from max_lat since row 0 is the north band
        box = BoundingBox(
            min_lat=box.max_lat - lat_div * (ri + 1),
            max_lat=box.max_lat - lat_div * ri,
            min_lon=box.min_lon + lon_div * ci,
            max_lon=box.min_lon + lon_div * (ci + 1),
        )

    center = box.center()
    return DecodedDigipin(
        digipin=format_digipin(pin),
        coordinate=Coordinate(
            latitude=round_coordinate(center.latitude),
            longitude=round_coordinate(center.longitude),
        ),
        bounds=box,
    )


def get_lat_lng_from_digipin(digipin: str) -> Union[Coordinate, InvalidCode]:
    """Decodes a DIGIPIN back into the centre of its cell."""
    decoded = decode_digipin(digipin)
    if isinstance(decoded, InvalidCode):
        return decoded
    return decoded.coordinate


def get_bounds_from_digipin(digipin: str) -> Union[BoundingBox, InvalidCode]:
    """Decodes a DIGIPIN into the bounding box of its cell."""
    decoded = decode_digipin(digipin)
    if isinstance(decoded, InvalidCode):
        return decoded
    return decoded.bounds
