import logging
from collections.abc import Collection

from redis.exceptions import RedisError

from domain.aggregation import aggregate
from domain.exceptions.currency import AggregationError, CacheError
from domain.models.price import CurrencyPriceBook
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.providers.base import PriceSource

logger = logging.getLogger(__name__)


class PriceService:
    def __init__(self, source: PriceSource, cache: RedisCacheService | None = None):
        self.source = source
        self.cache = cache

    async def get_price_book(self, currencies: Collection[str] | None = None) -> CurrencyPriceBook:
        cached = await self._get_cached(currencies)
        if cached is not None:
            return cached

        try:
            quotes = await self.source.fetch_quotes(currencies)
        except Exception as e:
            logger.error(f"Price source {self.source.name} failed: {e}")
            raise AggregationError(f"Could not read prices from {self.source.name}: {e}") from e

        book = aggregate(quotes)
        logger.info(f"Aggregated {len(quotes)} quotes into {len(book)} currencies")

        if self.cache is not None and book:
            try:
                await self.cache.set_price_book(book, currencies)
            except (CacheError, RedisError) as e:
                logger.warning(f"Could not cache price book: {e}")
        return book

    async def _get_cached(self, currencies: Collection[str] | None) -> CurrencyPriceBook | None:
        if self.cache is None:
            return None
        try:
            book = await self.cache.get_price_book(currencies)
        except (CacheError, RedisError) as e:
            logger.warning(f"Ignoring cached price book: {e}")
            return None

        logger.debug(f"Price book cache {'HIT' if book is not None else 'MISS'}")
        return book

    async def invalidate_cache(self) -> None:
        if self.cache is None:
            return
        try:
            removed = await self.cache.invalidate()
        except (CacheError, RedisError) as e:
            logger.warning(f"Could not invalidate cached price books: {e}")
            return
        logger.info(f"Invalidated {removed} cached price books")
