import asyncio
import logging
from datetime import date

from domain.models.currency import HistoricalRateSet, RateSnapshot
from infrastructure.providers.frankfurter import FrankfurterClient
from infrastructure.resilience.executor import CallExecutor

logger = logging.getLogger(__name__)


class RateService:
	"""Read-only queries against the rate source, each run through the call executor.

	Every query is a plain GET, so the executor may repeat it freely.
	"""

	def __init__(self, client: FrankfurterClient, executor: CallExecutor):
		self.client = client
		self.executor = executor

	async def get_latest_rates(
		self, base: str, cancel_event: asyncio.Event | None = None
	) -> RateSnapshot:
		logger.debug(f'Fetching latest rates for {base}')
		return await self.executor.execute(
			lambda: self.client.fetch_latest(base),
			description=f'latest rates for {base}',
			cancel_event=cancel_event,
		)

	async def get_rates_for_conversion(
		self, source: str, cancel_event: asyncio.Event | None = None
	) -> RateSnapshot:
		return await self.executor.execute(
			lambda: self.client.fetch_latest(source),
			description=f'conversion rates for {source}',
			cancel_event=cancel_event,
		)

	async def get_historical_rates(
		self,
		base: str,
		start_date: date,
		end_date: date,
		cancel_event: asyncio.Event | None = None,
	) -> HistoricalRateSet:
		# start_date <= end_date is checked by the caller
		logger.debug(f'Fetching historical rates for {base} from {start_date} to {end_date}')
		return await self.executor.execute(
			lambda: self.client.fetch_range(base, start_date, end_date),
			description=f'historical rates for {base} {start_date}..{end_date}',
			cancel_event=cancel_event,
		)
