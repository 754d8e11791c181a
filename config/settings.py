from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	"""Runtime configuration.

	Values resolve from init kwargs first, then the process environment, then
	``.env``, then the defaults below. Where a setting has several names the
	first one present in ``AliasChoices`` wins.
	"""

	# Price store
	PRICE_SOURCE: str = 'supabase'
	SUPABASE_URL: str = Field(
		'',
		validation_alias=AliasChoices(
			'SUPABASE_URL', 'NEXT_PUBLIC_SUPABASE_URL', 'VITE_SUPABASE_URL'
		),
	)
	SUPABASE_ANON_KEY: str = Field(
		'',
		validation_alias=AliasChoices(
			'SUPABASE_ANON_KEY', 'NEXT_PUBLIC_SUPABASE_ANON_KEY', 'VITE_SUPABASE_ANON_KEY'
		),
	)
	PRICES_TABLE: str = 'p2p_prices'
	DATABASE_URL: str = 'sqlite+aiosqlite:///./p2p_prices.db'
	HTTP_TIMEOUT_SECONDS: int = 10

	# Cache
	REDIS_URL: str = ''
	PRICE_CACHE_TTL_SECONDS: int = 30

	# Price refresh job
	API_RUN_URL: str = Field(
		'',
		validation_alias=AliasChoices('API_RUN_URL', 'NEXT_PUBLIC_API_RUN_URL', 'VITE_API_RUN_URL'),
	)
	CRON_TOKEN: str = ''
	CROM_TOKEN: str = Field(
		'',
		validation_alias=AliasChoices('CROM_TOKEN', 'NEXT_PUBLIC_CROM_TOKEN', 'VITE_CROM_TOKEN'),
	)
	WAKEUP_COOLDOWN_SECONDS: int = 60
	KEEPALIVE_ENABLED: bool = False
	KEEPALIVE_INTERVAL_SECONDS: int = 60

	# Application
	APP_NAME: str = 'P2P Currency Converter'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	def public_config(self) -> dict[str, str]:
		return {
			'NEXT_PUBLIC_SUPABASE_URL': self.SUPABASE_URL,
			'NEXT_PUBLIC_SUPABASE_ANON_KEY': self.SUPABASE_ANON_KEY,
			'VITE_SUPABASE_URL': self.SUPABASE_URL,
			'VITE_SUPABASE_ANON_KEY': self.SUPABASE_ANON_KEY,
		}


@lru_cache
def get_settings() -> Settings:
	return Settings()
