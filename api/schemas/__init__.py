from .responses import ConversionResponse, CurrencyPricesResponse, PriceBookResponse

__all__ = [
	'ConversionResponse',
	'CurrencyPricesResponse',
	'PriceBookResponse',
]
