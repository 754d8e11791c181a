import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import AggregationError, ValidationError, WakeupError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(ValidationError)
	async def validation_error_handler(request: Request, exc: ValidationError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(AggregationError)
	async def aggregation_error_handler(request: Request, exc: AggregationError):
		logger.error(f'Aggregation error: {exc} (cause: {exc.__cause__!r})')
		return JSONResponse(status_code=503, content={'detail': 'Price data unavailable'})

	@app.exception_handler(WakeupError)
	async def wakeup_error_handler(request: Request, exc: WakeupError):
		logger.error(f'Error in wakeup: {exc}')
		return JSONResponse(status_code=500, content={'error': 'Wakeup failed'})

	@app.exception_handler(Exception)
	async def global_exception_handler(request: Request, exc: Exception):
		logger.error(f'Unhandled exception: {exc}', exc_info=True)
		return JSONResponse(status_code=500, content={'detail': 'Internal server error'})
