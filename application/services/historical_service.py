import asyncio
from datetime import date

from application.services.currency_service import CurrencyService
from application.services.pagination import paginate, validate_page_window
from application.services.rate_service import RateService
from domain.exceptions.currency import InvalidDateRangeError
from domain.models.currency import HistoricalRateSet, PaginatedResult


class HistoricalRateService:
	def __init__(self, rate_service: RateService, currency_service: CurrencyService):
		self.rate_service = rate_service
		self.currency_service = currency_service

	async def get_historical_rates(
		self,
		base: str,
		start_date: date,
		end_date: date,
		page: int,
		page_size: int,
		cancel_event: asyncio.Event | None = None,
	) -> PaginatedResult[HistoricalRateSet]:
		if end_date < start_date:
			raise InvalidDateRangeError('Start date cannot be after end date.')
		validate_page_window(page, page_size)
		base = self.currency_service.normalize(base)

		rate_set = await self.rate_service.get_historical_rates(
			base, start_date, end_date, cancel_event=cancel_event
		)
		return paginate(rate_set, page, page_size)
