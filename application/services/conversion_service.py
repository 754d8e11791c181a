import logging
from datetime import datetime
from decimal import Decimal

from application.services.price_service import PriceService
from domain.conversion import convert, to_decimal
from domain.models.price import ConversionRequest, ConversionResult, CurrencyPriceBook

logger = logging.getLogger(__name__)


def _latest(*timestamps: datetime | None) -> datetime | None:
	present = [ts for ts in timestamps if ts is not None]
	return max(present) if present else None


class ConversionService:
	def __init__(self, price_service: PriceService):
		self.price_service = price_service

	async def convert(
		self,
		amount: Decimal,
		from_currency: str,
		to_currency: str,
		*,
		same_currency_passthrough: bool = False,
	) -> ConversionResult:
		request = ConversionRequest(
			amount=to_decimal(amount),
			source_currency=from_currency,
			dest_currency=to_currency,
		)

		if same_currency_passthrough and from_currency == to_currency:
			result = convert(request.amount, from_currency, to_currency, {}, same_currency_passthrough=True)
			return ConversionResult(
				amount=request.amount,
				source_currency=from_currency,
				dest_currency=to_currency,
				source_buy_rate=None,
				dest_sell_rate=None,
				result=result,
				updated_at=None,
			)

		book = await self.price_service.get_price_book({from_currency, to_currency})
		return self.convert_with_book(request, book)

	def convert_with_book(self, request: ConversionRequest, book: CurrencyPriceBook) -> ConversionResult:
		result = convert(request.amount, request.source_currency, request.dest_currency, book)

		source = book[request.source_currency]
		dest = book[request.dest_currency]

		logger.info(
			f'Converted {request.amount} {request.source_currency} -> '
			f'{result} {request.dest_currency} (buy={source.buy}, sell={dest.sell})'
		)

		return ConversionResult(
			amount=request.amount,
			source_currency=request.source_currency,
			dest_currency=request.dest_currency,
			source_buy_rate=source.buy,
			dest_sell_rate=dest.sell,
			result=result,
			updated_at=_latest(source.updated_at, dest.updated_at),
		)
