"""Currencies ADA can be priced in."""

from enum import Enum


class FiatCurrency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    CAD = "CAD"
    AUD = "AUD"
    CHF = "CHF"
    CNY = "CNY"
    INR = "INR"
    KRW = "KRW"
    BRL = "BRL"
    SGD = "SGD"


class CryptoCurrency(str, Enum):
    ADA = "ADA"
    BTC = "BTC"
    ETH = "ETH"


SupportedCurrency = FiatCurrency | CryptoCurrency

SUPPORTED_FIAT_CURRENCIES: list[str] = [currency.value for currency in FiatCurrency]
SUPPORTED_CRYPTO_CURRENCIES: list[str] = [currency.value for currency in CryptoCurrency]
SUPPORTED_CURRENCIES: list[str] = SUPPORTED_FIAT_CURRENCIES + SUPPORTED_CRYPTO_CURRENCIES


def parse_currency(code: str) -> SupportedCurrency:
    """Resolve a currency code, case-insensitively."""
    normalized = code.strip().upper()
    if normalized in SUPPORTED_FIAT_CURRENCIES:
        return FiatCurrency(normalized)
    if normalized in SUPPORTED_CRYPTO_CURRENCIES:
        return CryptoCurrency(normalized)
    raise ValueError(f"Unsupported currency: {code!r}. Supported: {', '.join(SUPPORTED_CURRENCIES)}")
