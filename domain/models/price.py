from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class PriceQuote:
    currency: str
    side: Side
    average_price: Decimal  # Units of `currency` per one unit of the intermediate asset
    observed_at: datetime | None


@dataclass(frozen=True)
class CurrencyPrices:
    buy: Decimal | None = None
    sell: Decimal | None = None
    updated_at: datetime | None = None


CurrencyPriceBook = dict[str, CurrencyPrices]


@dataclass(frozen=True)
class ConversionRequest:
    amount: Decimal
    source_currency: str
    dest_currency: str


@dataclass(frozen=True)
class ConversionResult:
    amount: Decimal
    source_currency: str
    dest_currency: str
    source_buy_rate: Decimal | None
    dest_sell_rate: Decimal | None
    result: Decimal
    updated_at: datetime | None
