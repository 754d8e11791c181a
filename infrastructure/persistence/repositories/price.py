import logging
from collections.abc import Collection

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from domain.exceptions.currency import PriceSourceError
from domain.models.price import PriceQuote
from infrastructure.persistence.database import Database
from infrastructure.persistence.models.price import P2PPriceDB
from infrastructure.providers.base import PriceSource, parse_price, parse_side, parse_timestamp

logger = logging.getLogger(__name__)


class PriceRepository(PriceSource):
	"""Reads the ``p2p_prices`` table straight from an SQL database."""

	def __init__(self, db: Database):
		self.db = db

	@property
	def name(self) -> str:
		return 'database'

	async def fetch_quotes(self, currencies: Collection[str] | None = None) -> list[PriceQuote]:
		stmt = select(P2PPriceDB).order_by(P2PPriceDB.id)
		if currencies:
			stmt = stmt.filter(P2PPriceDB.fiat.in_(list(currencies)))

		try:
			async with self.db.session() as session:
				result = await session.execute(stmt)
				rows = result.scalars().all()
		except SQLAlchemyError as e:
			raise PriceSourceError(f'Price table read failed: {e.__class__.__name__}') from e

		quotes = []
		for row in rows:
			side = parse_side(row.side)
			if side is None:
				logger.warning(f'Skipping {row.fiat} row {row.id} with unknown side {row.side!r}')
				continue
			quotes.append(
				PriceQuote(
					currency=row.fiat,
					side=side,
					average_price=parse_price(row.fiat, row.price_avg),
					observed_at=parse_timestamp(row.updated_at),
				)
			)
		return quotes

	async def close(self) -> None:
		await self.db.close()
