from typing import Any

import httpx

from domain.exceptions.currency import WakeupError


class RunJobClient:
	"""Talks to the serverless job that refreshes the stored P2P prices."""

	def __init__(self, client: httpx.AsyncClient | None = None, timeout: int = 10):
		self._client = client or httpx.AsyncClient(timeout=timeout)

	async def trigger(self, url: str, token: str) -> tuple[int, Any]:
		"""POST to the job and return its status code and JSON body untouched."""
		try:
			response = await self._client.post(
				url,
				headers={'Authorization': f'Bearer {token}', 'Content-Type': 'application/json'},
			)
			return response.status_code, response.json()
		except httpx.RequestError as e:
			raise WakeupError(f'Run job request failed: {e.__class__.__name__}') from e
		except ValueError as e:
			raise WakeupError(f'Run job returned invalid JSON: {str(e)}') from e

	async def ping(self, base_url: str, token: str) -> int:
		url = f'{base_url.rstrip("/")}/api/run'
		try:
			response = await self._client.post(url, json={}, headers={'x-crom-token': token})
			response.raise_for_status()
			return response.status_code
		except httpx.HTTPStatusError as e:
			raise WakeupError(f'Run job ping got HTTP {e.response.status_code}') from e
		except httpx.RequestError as e:
			raise WakeupError(f'Run job ping failed: {e.__class__.__name__}') from e

	async def close(self) -> None:
		await self._client.aclose()
