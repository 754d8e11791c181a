import logging
from datetime import timedelta
from typing import Annotated

from fastapi import Depends
from redis.asyncio import Redis

from application.services import ConversionService, CooldownLimiter, PriceService, WakeupService
from config.settings import Settings, get_settings
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.price import PriceRepository
from infrastructure.providers import PriceSource, RunJobClient, SupabasePriceSource
from infrastructure.workers.keepalive import KeepAliveWorker

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	db: Database | None = None
	price_source: PriceSource | None = None
	redis_client: Redis | None = None
	redis_cache: RedisCacheService | None = None
	run_job_client: RunJobClient | None = None
	wakeup_limiter: CooldownLimiter | None = None
	keepalive: KeepAliveWorker | None = None


deps = AppDependencies()


def build_price_source(settings: Settings) -> PriceSource:
	source = settings.PRICE_SOURCE.lower()
	if source == 'database':
		deps.db = Database(settings.DATABASE_URL)
		return PriceRepository(deps.db)
	if source == 'supabase':
		if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
			raise RuntimeError('SUPABASE_URL and SUPABASE_ANON_KEY must be configured')
		return SupabasePriceSource(
			base_url=settings.SUPABASE_URL,
			anon_key=settings.SUPABASE_ANON_KEY,
			table=settings.PRICES_TABLE,
			timeout=settings.HTTP_TIMEOUT_SECONDS,
		)
	raise RuntimeError(f'Unknown PRICE_SOURCE {settings.PRICE_SOURCE!r}')


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	deps.price_source = build_price_source(settings)

	if settings.REDIS_URL:
		deps.redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
		deps.redis_cache = RedisCacheService(
			deps.redis_client, ttl=timedelta(seconds=settings.PRICE_CACHE_TTL_SECONDS)
		)

	deps.run_job_client = RunJobClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
	deps.wakeup_limiter = CooldownLimiter(cooldown_seconds=settings.WAKEUP_COOLDOWN_SECONDS)
	deps.keepalive = KeepAliveWorker(
		client=deps.run_job_client,
		base_url=settings.API_RUN_URL,
		token=settings.CROM_TOKEN,
		interval=settings.KEEPALIVE_INTERVAL_SECONDS,
	)
	logger.info(f'Dependencies initialized (price source: {deps.price_source.name})')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.keepalive:
		await deps.keepalive.stop()
	if deps.redis_client:
		await deps.redis_client.aclose()
	if deps.price_source:
		await deps.price_source.close()
	if deps.run_job_client:
		await deps.run_job_client.close()

	logger.info('Cleanup complete')


def get_price_source() -> PriceSource:
	if deps.price_source is None:
		raise RuntimeError('Price source not initialized')
	return deps.price_source


def get_redis_cache() -> RedisCacheService | None:
	return deps.redis_cache


def get_run_job_client() -> RunJobClient:
	if deps.run_job_client is None:
		raise RuntimeError('Run job client not initialized')
	return deps.run_job_client


def get_wakeup_limiter() -> CooldownLimiter:
	if deps.wakeup_limiter is None:
		raise RuntimeError('Wakeup limiter not initialized')
	return deps.wakeup_limiter


async def get_price_service(
	source: Annotated[PriceSource, Depends(get_price_source)],
	cache: Annotated[RedisCacheService | None, Depends(get_redis_cache)],
) -> PriceService:
	return PriceService(source=source, cache=cache)


async def get_conversion_service(
	price_service: Annotated[PriceService, Depends(get_price_service)],
) -> ConversionService:
	return ConversionService(price_service=price_service)


async def get_wakeup_service(
	client: Annotated[RunJobClient, Depends(get_run_job_client)],
	limiter: Annotated[CooldownLimiter, Depends(get_wakeup_limiter)],
	price_service: Annotated[PriceService, Depends(get_price_service)],
	settings: Annotated[Settings, Depends(get_settings)],
) -> WakeupService:
	return WakeupService(
		client=client,
		limiter=limiter,
		run_url=settings.API_RUN_URL,
		token=settings.CRON_TOKEN,
		price_service=price_service,
	)
