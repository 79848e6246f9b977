"""Number formatting for display."""


def format_with_commas(value: str) -> str:
    """Add thousands separators to the whole part of a decimal string.

    ``"1234567.890000"`` becomes ``"1,234,567.890000"``.
    """
    whole, dot, decimal = value.partition(".")
    sign = ""
    if whole.startswith("-"):
        sign, whole = "-", whole[1:]
    formatted_whole = f"{int(whole):,}" if whole.isdigit() else whole
    return f"{sign}{formatted_whole}.{decimal}" if dot and decimal else f"{sign}{formatted_whole}"
