"""
Monetary precision helpers.

All amounts in the ordering engine are integers in minor units (cents). This module
is the one place where division happens, so rounding is consistent everywhere.

Key Principles:
1. NEVER use float for money
2. Store and sum integers in minor units; convert to Decimal only for display
3. Use ROUND_HALF_UP for VAT and averages (1.5 cents -> 2 cents)
4. Rates are basis points: 10000 bp = 100%
"""

from decimal import Decimal, ROUND_HALF_UP, getcontext

# Set high precision for intermediate calculations
getcontext().prec = 28

BASIS_POINTS_PER_UNIT = 10000

# Currency minor unit exponents (how many decimal places)
CURRENCY_EXPONENT = {
    # 2-decimal currencies (most common)
    "EUR": 2,  # Euro (cents)
    "USD": 2,  # United States Dollar (cents)
    "GBP": 2,  # British Pound (pence)
    "CHF": 2,  # Swiss Franc (rappen)
    "SEK": 2,  # Swedish Krona (ore)
    "DKK": 2,  # Danish Krone (ore)
    "PLN": 2,  # Polish Zloty (grosz)

    # Zero-decimal currencies
    "JPY": 0,  # Japanese Yen (no subunit)
    "KRW": 0,  # South Korean Won (no subunit)

    # 3-decimal currencies
    "KWD": 3,  # Kuwaiti Dinar (fils)
    "BHD": 3,  # Bahraini Dinar (fils)
}


def currency_exponent(currency: str) -> int:
    """
    Get the number of decimal places for a currency.

    Examples:
        >>> currency_exponent("EUR")
        2
        >>> currency_exponent("JPY")
        0
    """
    return CURRENCY_EXPONENT.get(currency.upper(), 2)


def divide_half_up(numerator: int, denominator: int) -> int:
    """
    Integer division rounded half-up (half away from zero).

    Examples:
        >>> divide_half_up(2850, 2)
        1425
        >>> divide_half_up(5, 2)
        3
        >>> divide_half_up(-5, 2)
        -3
    """
    if denominator == 0:
        raise ZeroDivisionError("divide_half_up() denominator is zero")
    result = (Decimal(numerator) / Decimal(denominator)).to_integral_value(rounding=ROUND_HALF_UP)
    return int(result)


def basis_points_of(amount_minor: int, rate_basis_points: int) -> int:
    """
    Apply a basis-point rate to an amount in minor units, rounding half-up.

    Examples:
        >>> basis_points_of(1200, 1900)   # 19% of 12.00
        228
        >>> basis_points_of(150, 700)     # 7% of 1.50 = 10.5 cents
        11
    """
    return divide_half_up(amount_minor * rate_basis_points, BASIS_POINTS_PER_UNIT)


def from_minor(currency: str, minor: int) -> Decimal:
    """
    Convert from minor units to Decimal (for display and exports).

    Examples:
        >>> from_minor("EUR", 1428)
        Decimal('14.28')
        >>> from_minor("JPY", 1235)
        Decimal('1235')
    """
    exponent = currency_exponent(currency)
    return (Decimal(minor) / (10 ** exponent)).quantize(Decimal(10) ** -exponent)


def format_money(currency: str, minor: int) -> str:
    """
    Format minor units as a human-readable string for logs and exports.

    Examples:
        >>> format_money("EUR", 1050)
        '€10.50'
        >>> format_money("SEK", 1050)
        'SEK 10.50'
    """
    amount = from_minor(currency, minor)

    symbols = {
        "USD": "$",
        "EUR": "€",
        "GBP": "£",
        "JPY": "¥",
        "KRW": "₩",
    }
    symbol = symbols.get(currency.upper(), currency.upper() + " ")

    exponent = currency_exponent(currency)
    return f"{symbol}{amount:,.{exponent}f}"
