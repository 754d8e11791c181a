from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import get_conversion_service, get_price_service
from api.schemas import ConversionResponse, CurrencyPricesResponse, PriceBookResponse
from application.services import ConversionService, PriceService
from domain.exceptions.currency import ValidationError

router = APIRouter(prefix='/api', tags=['prices'])

CurrencyCode = Annotated[str, Path(min_length=3, max_length=5)]


@router.get(
	'/convert/{from_currency}/{to_currency}/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert an amount through USDT',
)
async def convert_currency(
	from_currency: CurrencyCode,
	to_currency: CurrencyCode,
	amount: Annotated[Decimal, Path(ge=0)],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
	passthrough: Annotated[bool, Query(description='Return the amount as-is for equal currencies')] = False,
) -> ConversionResponse:
	from_currency = from_currency.upper()
	to_currency = to_currency.upper()
	if from_currency == to_currency and not passthrough:
		raise ValidationError('from_currency and to_currency must be different')

	result = await service.convert(
		amount, from_currency, to_currency, same_currency_passthrough=passthrough
	)
	return ConversionResponse(
		from_currency=result.source_currency,
		to_currency=result.dest_currency,
		original_amount=result.amount,
		converted_amount=result.result,
		buy_rate=result.source_buy_rate,
		sell_rate=result.dest_sell_rate,
		updated_at=result.updated_at,
	)


@router.get(
	'/prices',
	response_model=PriceBookResponse,
	status_code=status.HTTP_200_OK,
	summary='Current buy/sell prices per currency',
)
async def get_prices(
	service: Annotated[PriceService, Depends(get_price_service)],
	currencies: Annotated[list[str] | None, Query(description='Restrict to these currency codes')] = None,
) -> PriceBookResponse:
	codes = {c.upper() for c in currencies} if currencies else None
	book = await service.get_price_book(codes)
	return PriceBookResponse(
		prices={
			code: CurrencyPricesResponse(buy=p.buy, sell=p.sell, updated_at=p.updated_at)
			for code, p in book.items()
		}
	)
