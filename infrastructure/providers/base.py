from abc import ABC, abstractmethod
from collections.abc import Collection
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation

from domain.exceptions.currency import PriceSourceError
from domain.models.price import PriceQuote, Side


class PriceSource(ABC):
    """A read-only store of P2P price quotes."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    async def fetch_quotes(self, currencies: Collection[str] | None = None) -> list[PriceQuote]:
        """Return every stored quote, optionally restricted to ``currencies``."""
        ...

    async def close(self) -> None:
        return None


def parse_side(value) -> Side | None:
    try:
        return Side(str(value).upper())
    except ValueError:
        return None


def parse_timestamp(value) -> datetime | None:
    """Parse a row timestamp; naive values are taken as UTC so all quotes compare."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        try:
            value = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        except ValueError as e:
            raise PriceSourceError(f'Invalid timestamp {value!r}') from e
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def parse_price(currency: str, value) -> Decimal:
    if value is None:
        raise PriceSourceError(f'Missing average price for {currency}')
    try:
        price = Decimal(str(value))
    except InvalidOperation as e:
        raise PriceSourceError(f'Invalid average price {value!r} for {currency}') from e
    if not price.is_finite() or price <= 0:
        raise PriceSourceError(f'Invalid average price {value!r} for {currency}')
    return price
