"""Weight unit conversion for gold prices.

All upstream prices are quoted per troy ounce. A factor is the number of
target units in one troy ounce:

    price_per_unit = price_per_oz / factor
"""

from gold_api.services.errors import InvalidParameterError

DEFAULT_UNIT = "oz"

UNIT_CONVERSIONS: dict[str, float] = {
    "oz": 1.0,  # troy ounce (base unit)
    "g": 31.1035,
    "kg": 0.0311035,
}

UNIT_LABELS: dict[str, str] = {
    "oz": "per troy ounce",
    "g": "per gram",
    "kg": "per kilogram",
}


def validate_unit(unit: str) -> str:
    lower = unit.strip().lower()
    if lower not in UNIT_CONVERSIONS:
        raise InvalidParameterError(
            f"Invalid unit. Supported units: {', '.join(UNIT_CONVERSIONS)}"
        )
    return lower


def convert_price(price_per_oz: float | None, unit: str) -> float | None:
    if price_per_oz is None:
        return None
    return round(price_per_oz / UNIT_CONVERSIONS[unit], 2)


def get_unit_label(unit: str) -> str:
    return UNIT_LABELS[unit]
