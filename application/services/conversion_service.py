import asyncio
import logging
from decimal import Decimal

from application.services.currency_service import CurrencyService
from application.services.rate_service import RateService
from domain.exceptions.currency import InvalidAmountError, UnsupportedTargetCurrencyError
from domain.models.currency import ConversionRequest, ConversionResult

logger = logging.getLogger(__name__)


class ConversionService:
	def __init__(self, rate_service: RateService, currency_service: CurrencyService):
		self.rate_service = rate_service
		self.currency_service = currency_service

	async def convert(
		self, request: ConversionRequest, cancel_event: asyncio.Event | None = None
	) -> ConversionResult:
		# Input checks all happen before any upstream call.
		self.currency_service.ensure_not_excluded(request.source_currency, request.target_currency)

		if request.amount is None or Decimal(request.amount) <= 0:
			raise InvalidAmountError('Amount must be greater than zero.')

		source = self.currency_service.normalize(request.source_currency)
		target = self.currency_service.normalize(request.target_currency)
		amount = Decimal(request.amount)

		snapshot = await self.rate_service.get_rates_for_conversion(source, cancel_event=cancel_event)

		rate = snapshot.rates.get(target)
		if rate is None:
			logger.info(f'No {target} rate in {source} snapshot')
			raise UnsupportedTargetCurrencyError(f'Conversion from {source} to {target} is not supported.')

		return ConversionResult(
			source_currency=source,
			target_currency=target,
			amount=amount,
			rate=rate,
			converted_amount=amount * rate,
		)
