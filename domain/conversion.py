"""Conversion between two fiat currencies through the intermediate asset.

The pipeline always runs the same five phases:

1. take the input amount in the source currency;
2. truncate it to two decimals;
3. divide by the source BUY price and truncate the intermediate quantity;
4. subtract the flat fee, flooring the balance at zero;
5. multiply by the destination SELL price and truncate the result.

Every truncation drops digits toward zero; nothing is ever rounded up.
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext

from domain.exceptions.currency import ValidationError
from domain.models.price import CurrencyPriceBook

FEE = Decimal('0.14')

_SCALE = Decimal(100)
_ZERO = Decimal(0)


def _precision(*values: Decimal) -> int:
    # Enough significant digits to keep products exact and quotients past the hundredths.
    digits = 0
    for value in values:
        _, coefficient, exponent = value.as_tuple()
        digits += len(coefficient) + abs(exponent)
    return max(28, digits + 4)


def truncate2(value: Decimal) -> Decimal:
    """Drop digits beyond the hundredths place, toward zero."""
    with localcontext() as ctx:
        ctx.rounding = ROUND_DOWN
        ctx.prec = max(ctx.prec, _precision(value))
        scaled = (value * _SCALE).to_integral_value()
        return scaled / _SCALE


def to_decimal(amount) -> Decimal:
    if isinstance(amount, bool):
        raise ValidationError(f'Amount must be a number, got {amount!r}')
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, (int, float, str)):
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation as e:
            raise ValidationError(f'Amount must be a number, got {amount!r}') from e
    else:
        raise ValidationError(f'Amount must be a number, got {type(amount).__name__}')

    if not value.is_finite():
        raise ValidationError(f'Amount must be finite, got {amount!r}')
    if value < 0:
        raise ValidationError(f'Amount must be greater than or equal to 0, got {amount!r}')
    return value


def _validate_book(source_currency: str, dest_currency: str, price_book: CurrencyPriceBook):
    if source_currency not in price_book:
        raise ValidationError(f'No prices available for source currency {source_currency}')
    if dest_currency not in price_book:
        raise ValidationError(f'No prices available for destination currency {dest_currency}')

    buy = price_book[source_currency].buy
    if buy is None or buy <= 0:
        raise ValidationError(f'Missing BUY price for source currency {source_currency}')

    sell = price_book[dest_currency].sell
    if sell is None or sell <= 0:
        raise ValidationError(f'Missing SELL price for destination currency {dest_currency}')

    return buy, sell


def convert(
    amount,
    source_currency: str,
    dest_currency: str,
    price_book: CurrencyPriceBook,
    *,
    same_currency_passthrough: bool = False,
) -> Decimal:
    value = to_decimal(amount)

    if same_currency_passthrough and source_currency == dest_currency:
        return value

    buy, sell = _validate_book(source_currency, dest_currency, price_book)

    with localcontext() as ctx:
        ctx.rounding = ROUND_DOWN
        ctx.prec = _precision(value, buy, sell, FEE)
        normalized = truncate2(value)
        intermediate = truncate2(normalized / buy)
        after_fee = max(intermediate - FEE, _ZERO)
        return truncate2(after_fee * sell)
