import json
from collections.abc import Collection
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation

from redis import asyncio as redis
from redis.exceptions import RedisError

from domain.exceptions.currency import CacheError
from domain.models.price import CurrencyPriceBook, CurrencyPrices


def _dump_decimal(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


def _dump_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class RedisCacheService:
    KEY_PREFIX = "prices:book"

    def __init__(self, redis_client: redis.Redis, ttl: timedelta = timedelta(seconds=30)):
        self.redis = redis_client
        self.price_ttl = ttl

    def _make_book_key(self, currencies: Collection[str] | None) -> str:
        if not currencies:
            return f"{self.KEY_PREFIX}:all"
        return f"{self.KEY_PREFIX}:{','.join(sorted(currencies))}"

    async def get_price_book(self, currencies: Collection[str] | None = None) -> CurrencyPriceBook | None:
        key = self._make_book_key(currencies)
        try:
            data = await self.redis.get(key)
        except RedisError as e:
            raise CacheError(f"Redis read failed for {key}: {e}") from e

        if not data:
            return None

        try:
            raw = json.loads(data)
            return {
                code: CurrencyPrices(
                    buy=Decimal(entry["buy"]) if entry["buy"] is not None else None,
                    sell=Decimal(entry["sell"]) if entry["sell"] is not None else None,
                    updated_at=(
                        datetime.fromisoformat(entry["updated_at"])
                        if entry["updated_at"] is not None
                        else None
                    ),
                )
                for code, entry in raw.items()
            }
        except json.JSONDecodeError as e:
            raise CacheError(f"Invalid json data under {key}") from e
        except (KeyError, TypeError, AttributeError, ValueError, InvalidOperation) as e:
            raise CacheError(f"Malformed price book under {key}: {e}") from e

    async def set_price_book(
        self, book: CurrencyPriceBook, currencies: Collection[str] | None = None
    ) -> None:
        key = self._make_book_key(currencies)

        book_dict = {
            code: {
                "buy": _dump_decimal(prices.buy),
                "sell": _dump_decimal(prices.sell),
                "updated_at": _dump_datetime(prices.updated_at),
            }
            for code, prices in book.items()
        }

        try:
            await self.redis.setex(key, self.price_ttl, json.dumps(book_dict))
        except RedisError as e:
            raise CacheError(f"Redis write failed for {key}: {e}") from e

    async def invalidate(self) -> int:
        try:
            keys = [key async for key in self.redis.scan_iter(match=f"{self.KEY_PREFIX}:*")]
            if not keys:
                return 0
            return await self.redis.delete(*keys)
        except RedisError as e:
            raise CacheError(f"Redis invalidation failed: {e}") from e
