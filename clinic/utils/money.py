from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_money(value: Optional[Number]) -> Decimal:
    """
    Coerce a stored or submitted amount to a 2-place Decimal.
    None (e.g. SUM over no rows) becomes 0.00.
    """
    if value is None:
        return Decimal("0.00")
    # floats go through str() so 0.1 stays 0.1
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def money_sum(values: Iterable[Number]) -> Decimal:
    return to_money(sum((to_money(v) for v in values), Decimal("0")))
