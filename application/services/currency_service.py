import logging
from collections.abc import Iterable

from domain.exceptions.currency import ExcludedCurrencyError, InvalidCurrencyError

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_CURRENCIES = frozenset({'TRY', 'PLN', 'THB', 'MXN'})


class CurrencyService:
	"""Currency code normalization and the excluded-currency policy."""

	def __init__(self, excluded_currencies: Iterable[str] = DEFAULT_EXCLUDED_CURRENCIES):
		self.excluded_currencies = frozenset(code.upper() for code in excluded_currencies)

	def normalize(self, code: str) -> str:
		normalized = (code or '').strip().upper()
		if len(normalized) != 3 or not normalized.isalpha():
			raise InvalidCurrencyError(f'Currency code {code!r} must be three letters')
		return normalized

	def is_excluded(self, code: str) -> bool:
		return (code or '').strip().upper() in self.excluded_currencies

	def ensure_not_excluded(self, *codes: str) -> None:
		for code in codes:
			if self.is_excluded(code):
				logger.info(f'Rejected conversion involving excluded currency {code}')
				excluded = ', '.join(sorted(self.excluded_currencies))
				raise ExcludedCurrencyError(f'Currency conversion for {excluded} is not supported.')
