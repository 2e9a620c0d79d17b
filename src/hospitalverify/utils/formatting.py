"""Display formatting helpers."""


def _group_indian(digits: str) -> str:
    # Last three digits, then groups of two: 12,34,56,789
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: float) -> str:
    """Format an amount in rupees with Indian digit grouping.

    >>> format_currency(123456.5)
    '₹1,23,456.50'
    """
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.2f}".split(".")
    return f"{sign}₹{_group_indian(whole)}.{fraction}"
