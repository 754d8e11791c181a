# nosec B101


import pytest
import json
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

from redis.exceptions import ConnectionError as RedisConnectionError


from infrastructure.cache.redis_cache import RedisCacheService
from domain.models.price import CurrencyPrices
from domain.exceptions.currency import CacheError


# ============================================================================
# TEST: get_price_book() - Cache Read Scenarios
# ============================================================================

@pytest.mark.asyncio
async def test_get_price_book_cache_hit_returns_book():
    mock_redis = AsyncMock()
    cached_data = json.dumps({
        'ARS': {'buy': '1050.00', 'sell': '1040.00', 'updated_at': '2025-11-05T10:30:00+00:00'},
        'BOB': {'buy': None, 'sell': '7.02', 'updated_at': None},
    })

    mock_redis.get.return_value = cached_data
    cache_service = RedisCacheService(redis_client=mock_redis)
    result = await cache_service.get_price_book({'ARS', 'BOB'})

    assert result is not None
    assert result['ARS'] == CurrencyPrices(
        buy=Decimal('1050.00'),
        sell=Decimal('1040.00'),
        updated_at=datetime(2025, 11, 5, 10, 30, tzinfo=UTC),
    )
    assert isinstance(result['ARS'].buy, Decimal)
    assert result['BOB'].buy is None
    assert result['BOB'].updated_at is None

    mock_redis.get.assert_called_once_with('prices:book:ARS,BOB')


@pytest.mark.asyncio
async def test_get_price_book_cache_miss_returns_none():
    mock_redis = AsyncMock()
    mock_redis.get.return_value = None

    cache_service = RedisCacheService(redis_client=mock_redis)

    result = await cache_service.get_price_book()
    assert result is None
    mock_redis.get.assert_called_once_with('prices:book:all')


@pytest.mark.asyncio
async def test_get_price_book_malformed_json_raises():
    mock_redis = AsyncMock()
    mock_redis.get.return_value = "{ invalid json }"

    cache_service = RedisCacheService(redis_client=mock_redis)

    with pytest.raises(CacheError) as exc_info:
        await cache_service.get_price_book()

    assert 'Invalid json data' in str(exc_info.value)


@pytest.mark.asyncio
async def test_get_price_book_missing_field_raises():
    mock_redis = AsyncMock()
    mock_redis.get.return_value = json.dumps({'ARS': {'buy': '1050.00'}})

    cache_service = RedisCacheService(redis_client=mock_redis)

    with pytest.raises(CacheError, match='Malformed price book'):
        await cache_service.get_price_book()


@pytest.mark.asyncio
async def test_get_price_book_preserves_decimal_precision():
    mock_redis = AsyncMock()
    mock_redis.get.return_value = json.dumps({
        'VES': {'buy': '43521.123456', 'sell': '43000.5', 'updated_at': None},
    })

    cache_service = RedisCacheService(redis_client=mock_redis)
    result = await cache_service.get_price_book()

    assert str(result['VES'].buy) == '43521.123456'


@pytest.mark.asyncio
async def test_get_price_book_redis_outage_raises_cache_error():
    mock_redis = AsyncMock()
    mock_redis.get.side_effect = RedisConnectionError('Connection refused')

    cache_service = RedisCacheService(redis_client=mock_redis)

    with pytest.raises(CacheError, match='Redis read failed for prices:book:all'):
        await cache_service.get_price_book()


# ============================================================================
# TEST: set_price_book() - Cache Write Scenarios
# ============================================================================

@pytest.mark.asyncio
async def test_set_price_book_serializes_and_stores_with_ttl():
    mock_redis = AsyncMock()
    cache_service = RedisCacheService(redis_client=mock_redis)

    book = {
        'ARS': CurrencyPrices(
            buy=Decimal('1050.00'),
            sell=None,
            updated_at=datetime(2025, 11, 5, 10, 30, tzinfo=UTC),
        ),
    }

    await cache_service.set_price_book(book, {'ARS'})

    mock_redis.setex.assert_called_once()

    call_args = mock_redis.setex.call_args
    key = call_args[0][0]
    ttl = call_args[0][1]
    stored_data = call_args[0][2]

    assert key == 'prices:book:ARS'
    assert ttl == timedelta(seconds=30)

    stored_dict = json.loads(stored_data)
    assert stored_dict == {
        'ARS': {'buy': '1050.00', 'sell': None, 'updated_at': '2025-11-05T10:30:00+00:00'}
    }


@pytest.mark.asyncio
async def test_set_price_book_uses_configured_ttl():
    mock_redis = AsyncMock()
    cache_service = RedisCacheService(redis_client=mock_redis, ttl=timedelta(minutes=2))

    await cache_service.set_price_book({})

    assert mock_redis.setex.call_args[0][1] == timedelta(minutes=2)


@pytest.mark.asyncio
async def test_set_price_book_redis_outage_raises_cache_error():
    mock_redis = AsyncMock()
    mock_redis.setex.side_effect = RedisConnectionError('Connection refused')

    cache_service = RedisCacheService(redis_client=mock_redis)

    with pytest.raises(CacheError, match='Redis write failed'):
        await cache_service.set_price_book({}, {'ARS'})


# ============================================================================
# TEST: invalidate()
# ============================================================================

@pytest.mark.asyncio
async def test_invalidate_deletes_every_book_key():
    mock_redis = AsyncMock()

    async def scan_iter(match):
        for key in ['prices:book:all', 'prices:book:ARS,BOB']:
            yield key

    mock_redis.scan_iter = Mock(side_effect=scan_iter)
    mock_redis.delete.return_value = 2

    cache_service = RedisCacheService(redis_client=mock_redis)
    removed = await cache_service.invalidate()

    assert removed == 2
    mock_redis.scan_iter.assert_called_once_with(match='prices:book:*')
    mock_redis.delete.assert_awaited_once_with('prices:book:all', 'prices:book:ARS,BOB')


@pytest.mark.asyncio
async def test_invalidate_with_nothing_cached():
    mock_redis = AsyncMock()

    async def scan_iter(match):
        for key in []:
            yield key

    mock_redis.scan_iter = Mock(side_effect=scan_iter)

    cache_service = RedisCacheService(redis_client=mock_redis)

    assert await cache_service.invalidate() == 0
    mock_redis.delete.assert_not_called()


# ============================================================================
# TEST: Key Generation Logic
# ============================================================================

def test_make_book_key_is_order_independent():
    cache_service = RedisCacheService(redis_client=AsyncMock())

    assert cache_service._make_book_key(['BOB', 'ARS']) == cache_service._make_book_key({'ARS', 'BOB'})
    assert cache_service._make_book_key(None) == 'prices:book:all'
    assert cache_service._make_book_key(['ARS']) != cache_service._make_book_key(['ARS', 'BOB'])
