import logging
from collections.abc import Collection

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from domain.exceptions.currency import PriceSourceError
from domain.models.price import PriceQuote
from infrastructure.providers.base import PriceSource, parse_price, parse_side, parse_timestamp

logger = logging.getLogger(__name__)


class SupabasePriceSource(PriceSource):
	COLUMNS = 'fiat,side,price_avg,updated_at'

	def __init__(
		self,
		base_url: str,
		anon_key: str,
		table: str = 'p2p_prices',
		client: httpx.AsyncClient | None = None,
		timeout: int = 10,
	):
		self.base_url = base_url.rstrip('/')
		self.anon_key = anon_key
		self.table = table
		self._client = client or httpx.AsyncClient(timeout=timeout)

	@property
	def name(self) -> str:
		return 'supabase'

	@property
	def url(self) -> str:
		return f'{self.base_url}/rest/v1/{self.table}'

	def _headers(self) -> dict:
		return {
			'apikey': self.anon_key,
			'Authorization': f'Bearer {self.anon_key}',
			'Accept': 'application/json',
		}

	@retry(
		stop=stop_after_attempt(3),
		wait=wait_exponential(multiplier=0.2, max=2),
		retry=retry_if_exception_type(httpx.TransportError),
		reraise=True,
	)
	async def _get(self, params: dict) -> httpx.Response:
		response = await self._client.get(self.url, params=params, headers=self._headers())
		response.raise_for_status()
		return response

	async def _request(self, params: dict) -> list:
		try:
			response = await self._get(params)
			data = response.json()
		except httpx.HTTPStatusError as e:
			raise PriceSourceError(
				f'Supabase HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise PriceSourceError(f'Supabase request failed: {e.__class__.__name__}') from e
		except Exception as e:
			raise PriceSourceError(f'Supabase response parsing error: {str(e)}') from e

		if not isinstance(data, list):
			raise PriceSourceError(f'Supabase returned {type(data).__name__}, expected a list of rows')
		return data

	async def fetch_quotes(self, currencies: Collection[str] | None = None) -> list[PriceQuote]:
		params = {'select': self.COLUMNS}
		if currencies:
			params['fiat'] = f'in.({",".join(sorted(currencies))})'

		rows = await self._request(params)

		quotes = []
		for row in rows:
			try:
				currency = row['fiat']
			except (KeyError, TypeError) as e:
				raise PriceSourceError(f'Malformed price row: {row!r}') from e

			side = parse_side(row.get('side'))
			if side is None:
				logger.warning(f'Skipping {currency} row with unknown side {row.get("side")!r}')
				continue

			quotes.append(
				PriceQuote(
					currency=currency,
					side=side,
					average_price=parse_price(currency, row.get('price_avg')),
					observed_at=parse_timestamp(row.get('updated_at')),
				)
			)

		logger.debug(f'Fetched {len(quotes)} quotes from {self.table}')
		return quotes

	async def close(self) -> None:
		await self._client.aclose()
