import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from application.services.price_service import PriceService
from infrastructure.providers.run_job import RunJobClient

logger = logging.getLogger(__name__)


class CooldownLimiter:
	"""Allows one effective call per ``cooldown_seconds`` window.

	The window only starts when ``mark()`` is called, so failed calls do not
	consume it.
	"""

	def __init__(self, cooldown_seconds: float = 60, clock: Callable[[], float] = time.monotonic):
		self.cooldown_seconds = cooldown_seconds
		self.clock = clock
		self._last_call: float | None = None

	def remaining(self) -> float:
		if self._last_call is None:
			return 0.0
		elapsed = self.clock() - self._last_call
		return max(self.cooldown_seconds - elapsed, 0.0)

	def mark(self) -> None:
		self._last_call = self.clock()


@dataclass(frozen=True)
class WakeupOutcome:
	status_code: int
	body: Any


class WakeupService:
	def __init__(
		self,
		client: RunJobClient,
		limiter: CooldownLimiter,
		run_url: str,
		token: str,
		price_service: PriceService | None = None,
	):
		self.client = client
		self.limiter = limiter
		self.run_url = run_url
		self.token = token
		self.price_service = price_service

	async def wake(self) -> WakeupOutcome:
		remaining = self.limiter.remaining()
		if remaining > 0:
			seconds = math.ceil(remaining)
			logger.info(f'Wakeup skipped, {seconds}s of cooldown left')
			return WakeupOutcome(
				status_code=200,
				body={
					'status': 'cooldown',
					'message': f'Wait {seconds} seconds before refreshing again',
					'remainingSeconds': seconds,
				},
			)

		if not self.run_url or not self.token:
			logger.error('Wakeup requested but API_RUN_URL or CRON_TOKEN is not configured')
			return WakeupOutcome(
				status_code=500, body={'error': 'API_RUN_URL or CRON_TOKEN not configured'}
			)

		status_code, body = await self.client.trigger(self.run_url, self.token)
		if 200 <= status_code < 300:
			self.limiter.mark()
			# Fresh prices are on their way
			if self.price_service is not None:
				await self.price_service.invalidate_cache()
		else:
			logger.warning(f'Run job answered HTTP {status_code}')

		return WakeupOutcome(status_code=status_code, body=body)
