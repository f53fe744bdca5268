def format_currency(amount: float) -> str:
    """USD with thousands separators and no decimals, e.g. -$1,234."""
    rounded = round(float(amount))
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.0f}"


def format_duration(months: int) -> str:
    years, remaining = divmod(int(months), 12)
    return f"{years}y {remaining}m"


def format_term(months: int) -> str:
    """'30-year' when the term is whole years, '18-month' otherwise."""
    months = int(months)
    if months % 12 == 0:
        return f"{months // 12}-year"
    return f"{months}-month"


def format_rate(rate: float) -> str:
    return f"{float(rate):g}%"
