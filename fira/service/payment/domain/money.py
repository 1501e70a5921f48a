def percentage_of(amount: int, percentage: int) -> int:
    """Integer percentage of an amount, halves rounded up (5% of 250 -> 13)."""
    return (amount * percentage + 50) // 100


def to_minor_unit(amount: int) -> int:
    # rupees -> paise
    return amount * 100
