from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	original_amount: Decimal = Field(..., description='Original amount requested')
	converted_amount: Decimal = Field(..., description='Converted amount, truncated to 2 decimals')
	buy_rate: Decimal | None = Field(None, description='BUY price of the source currency')
	sell_rate: Decimal | None = Field(None, description='SELL price of the destination currency')
	updated_at: datetime | None = Field(None, description='Most recent quote timestamp used')

	class ConfigDict:
		json_schema_extra = {
			'example': {
				'from_currency': 'ARS',
				'to_currency': 'BOB',
				'original_amount': 1000,
				'converted_amount': 5.68,
				'buy_rate': 1050.00,
				'sell_rate': 7.02,
				'updated_at': '2025-09-27T10:30:00Z',
			}
		}


class CurrencyPricesResponse(BaseModel):
	buy: Decimal | None = Field(None, description='Price of one USDT when buying with this currency')
	sell: Decimal | None = Field(None, description='Price of one USDT when selling for this currency')
	updated_at: datetime | None = Field(None, description='Most recent quote timestamp')


class PriceBookResponse(BaseModel):
	prices: dict[str, CurrencyPricesResponse] = Field(description='Prices keyed by currency code')

	class ConfigDict:
		json_schema_extra = {
			'examples': [
				{
					'prices': {
						'ARS': {'buy': 1050.0, 'sell': 1040.0, 'updated_at': '2025-09-27T10:30:00Z'},
						'BOB': {'buy': 7.1, 'sell': 7.02, 'updated_at': '2025-09-27T10:29:00Z'},
					}
				}
			]
		}
