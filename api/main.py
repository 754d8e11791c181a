import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.dependencies import cleanup_dependencies, deps, init_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import ops, prices
from config.logger import configure_logging
from config.settings import get_settings

logger = logging.getLogger(__name__)


settings = get_settings()
configure_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info('Starting P2P Currency Converter API...')

	init_dependencies(settings)

	if deps.db is not None:
		await deps.db.create_tables()
		logger.info('Database tables created')

	if settings.KEEPALIVE_ENABLED and deps.keepalive is not None:
		deps.keepalive.start()

	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies()


app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)

app.include_router(prices.router)
app.include_router(ops.router)
register_exception_handlers(app)
