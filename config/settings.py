from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	UPSTREAM_BASE_URL: str = 'https://api.frankfurter.app'
	UPSTREAM_TIMEOUT: float = 10.0

	# Admission control and retry
	MAX_CONCURRENT_CALLS: int = 10
	MAX_QUEUED_CALLS: int = 50
	MAX_RETRY_ATTEMPTS: int = 3
	INITIAL_BACKOFF_SECONDS: float = 1.0

	EXCLUDED_CURRENCIES: list[str] = ['TRY', 'PLN', 'THB', 'MXN']

	# Application
	APP_NAME: str = 'Exchange Rate Gateway'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	@property
	def excluded_currencies(self) -> frozenset[str]:
		return frozenset(code.upper() for code in self.EXCLUDED_CURRENCIES)


@lru_cache
def get_settings() -> Settings:
	return Settings()
