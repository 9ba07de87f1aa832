"""Number formatting at the presentation and export boundary."""

ENERGY_DECIMALS = 3
CURRENCY_DECIMALS = 2
PRICE_DECIMALS = 5


def round_energy(value: float) -> float:
    return round(value, ENERGY_DECIMALS)


def round_currency(value: float) -> float:
    return round(value, CURRENCY_DECIMALS)


def format_kwh(value: float) -> str:
    return f"{value:.{ENERGY_DECIMALS}f}"


def format_currency(value: float) -> str:
    return f"{value:.{CURRENCY_DECIMALS}f}"


def format_price(value: float) -> str:
    return f"{value:.{PRICE_DECIMALS}f}"
