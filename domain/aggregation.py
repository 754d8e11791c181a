from collections.abc import Iterable
from datetime import datetime

from domain.models.price import CurrencyPriceBook, CurrencyPrices, PriceQuote, Side


def _is_newer(candidate: datetime | None, current: datetime | None) -> bool:
    # Equal or missing timestamps fall back to iteration order: the later quote wins.
    if current is None:
        return True
    if candidate is None:
        return False
    return candidate >= current


def aggregate(quotes: Iterable[PriceQuote]) -> CurrencyPriceBook:
    """Reduce raw quotes into one buy/sell pair per currency.

    For every (currency, side) slot the quote with the most recent
    ``observed_at`` wins. Prices are never averaged. ``updated_at`` is the
    latest timestamp seen for the currency on either side.
    """
    selected: dict[tuple[str, Side], PriceQuote] = {}
    latest: dict[str, datetime | None] = {}

    for quote in quotes:
        key = (quote.currency, quote.side)
        current = selected.get(key)
        if current is None or _is_newer(quote.observed_at, current.observed_at):
            selected[key] = quote

        seen = latest.get(quote.currency)
        if quote.observed_at is not None and (seen is None or quote.observed_at > seen):
            latest[quote.currency] = quote.observed_at
        else:
            latest.setdefault(quote.currency, seen)

    book: CurrencyPriceBook = {}
    for currency, updated_at in latest.items():
        buy = selected.get((currency, Side.BUY))
        sell = selected.get((currency, Side.SELL))
        book[currency] = CurrencyPrices(
            buy=buy.average_price if buy else None,
            sell=sell.average_price if sell else None,
            updated_at=updated_at,
        )
    return book
