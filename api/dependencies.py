import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request

from application.services import (
	ConversionService,
	CurrencyService,
	HistoricalRateService,
	RateService,
)
from config.settings import Settings, get_settings
from infrastructure.providers import FrankfurterClient
from infrastructure.resilience import CallExecutor, ResilienceConfig

logger = logging.getLogger(__name__)

DISCONNECT_POLL_SECONDS = 0.5


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	client: FrankfurterClient | None = None
	executor: CallExecutor | None = None
	currency_service: CurrencyService | None = None


deps = AppDependencies()


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	deps.client = FrankfurterClient(
		base_url=settings.UPSTREAM_BASE_URL, timeout=settings.UPSTREAM_TIMEOUT
	)
	deps.executor = CallExecutor(
		ResilienceConfig(
			max_concurrent=settings.MAX_CONCURRENT_CALLS,
			max_queued=settings.MAX_QUEUED_CALLS,
			max_attempts=settings.MAX_RETRY_ATTEMPTS,
			initial_delay=settings.INITIAL_BACKOFF_SECONDS,
		)
	)
	deps.currency_service = CurrencyService(settings.excluded_currencies)
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.client:
		await deps.client.close()
	deps.client = None
	deps.executor = None
	deps.currency_service = None

	logger.info('Cleanup complete')


def get_executor() -> CallExecutor:
	if deps.executor is None:
		raise RuntimeError('Call executor not initialized')
	return deps.executor


def get_currency_service() -> CurrencyService:
	if deps.currency_service is None:
		raise RuntimeError('Currency service not initialized')
	return deps.currency_service


def get_rate_service(executor: Annotated[CallExecutor, Depends(get_executor)]) -> RateService:
	if deps.client is None:
		raise RuntimeError('Rate client not initialized')
	return RateService(client=deps.client, executor=executor)


def get_conversion_service(
	rate_service: Annotated[RateService, Depends(get_rate_service)],
	currency_service: Annotated[CurrencyService, Depends(get_currency_service)],
) -> ConversionService:
	return ConversionService(rate_service=rate_service, currency_service=currency_service)


def get_historical_service(
	rate_service: Annotated[RateService, Depends(get_rate_service)],
	currency_service: Annotated[CurrencyService, Depends(get_currency_service)],
) -> HistoricalRateService:
	return HistoricalRateService(rate_service=rate_service, currency_service=currency_service)


async def get_cancel_event(request: Request) -> AsyncGenerator[asyncio.Event, None]:
	"""Yields an event that is set once the client goes away."""
	event = asyncio.Event()

	async def watch() -> None:
		while not event.is_set():
			if await request.is_disconnected():
				logger.info(f'Client disconnected from {request.url.path}, cancelling upstream work')
				event.set()
				return
			await asyncio.sleep(DISCONNECT_POLL_SECONDS)

	watcher = asyncio.create_task(watch())
	try:
		yield event
	finally:
		watcher.cancel()
