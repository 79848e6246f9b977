"""VESPR API response models and Cardano unit helpers.

Each response model field declares its contract:

- required: no default, strict type
- optional with default: substituted when the field is absent
- optional nullable: ``None`` when absent or ``null``
"""

from decimal import Context, Decimal, DecimalException, InvalidOperation, localcontext

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

LOVELACE_PER_ADA = 1_000_000
ADA_DECIMALS = 6

MAX_TOKEN_DECIMALS = 255

# Portfolio arithmetic; the default 28 digits cannot quantize large token values
VALUE_CONTEXT = Context(prec=1000)

MIN_ADDRESS_LENGTH = 50
MAINNET_PREFIX = "addr1"
TESTNET_PREFIX = "addr_test1"


class _ResponseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class TokenInfo(_ResponseModel):
    """Native token held by a wallet."""

    policy: StrictStr
    hex_asset_name: StrictStr
    name: StrictStr = ""
    ticker: StrictStr | None = None
    quantity: StrictStr = "0"
    decimals: StrictInt = Field(default=0, ge=0, le=MAX_TOKEN_DECIMALS)
    ada_per_unit: StrictStr | None = None


class WalletDetailedResponse(_ResponseModel):
    """Response of ``POST /v7/wallet/detailed``."""

    lovelace: StrictStr
    rewards_lovelace: StrictStr = "0"
    handles: list[StrictStr] = Field(default_factory=list)
    tokens: list[TokenInfo] = Field(default_factory=list)


class AdaSpotPriceResponse(_ResponseModel):
    """Response of ``GET /v5/ada/spot``."""

    currency: StrictStr
    spot: StrictStr
    spot_1h_ago: StrictStr | None = Field(default=None, alias="spot1hAgo")
    spot_24h_ago: StrictStr | None = Field(default=None, alias="spot24hAgo")


def is_valid_cardano_address(address: str) -> bool:
    """Basic format check for a bech32 Shelley address.

    Not a checksum validation, just enough to catch obvious mistakes before an
    API call is made.
    """
    if not isinstance(address, str):
        return False

    trimmed = address.strip()
    if len(trimmed) < MIN_ADDRESS_LENGTH:
        return False

    return trimmed.startswith(MAINNET_PREFIX) or trimmed.startswith(TESTNET_PREFIX)


def format_token_amount(quantity: str, decimals: int) -> str:
    """Format an integer base-unit quantity with ``decimals`` fractional digits."""
    if decimals == 0:
        return quantity

    value = int(quantity)
    sign = "-" if value < 0 else ""
    whole, remainder = divmod(abs(value), 10**decimals)
    return f"{sign}{whole}.{str(remainder).zfill(decimals)}"


def lovelace_to_ada(lovelace: str) -> str:
    """Convert a lovelace amount to an ADA string with six decimal places."""
    return format_token_amount(lovelace, ADA_DECIMALS)


def to_finite_decimal(value: str | None) -> Decimal | None:
    """Parse a decimal string from the API, or None for missing, malformed, NaN or infinite values."""
    if value is None:
        return None
    try:
        number = Decimal(value)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def calculate_token_value(amount: str, ada_per_unit: str | None) -> Decimal | None:
    """ADA value of a token amount, or None when no usable rate is known."""
    rate = to_finite_decimal(ada_per_unit)
    if rate is None:
        return None
    try:
        with localcontext(VALUE_CONTEXT):
            return Decimal(amount) * rate
    except DecimalException:
        return None
