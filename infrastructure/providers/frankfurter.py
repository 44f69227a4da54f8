from datetime import date
from decimal import Decimal

import httpx

from domain.exceptions.currency import DeserializationError, UpstreamError
from domain.models.currency import HistoricalRateSet, RateSnapshot


class FrankfurterClient:
	"""Single-attempt client for the Frankfurter rate API. Retrying is the caller's job."""

	BASE_URL = 'https://api.frankfurter.app'

	def __init__(
		self,
		base_url: str | None = None,
		client: httpx.AsyncClient | None = None,
		timeout: float = 10,
	):
		self.base_url = (base_url or self.BASE_URL).rstrip('/')
		self._client = client or httpx.AsyncClient(timeout=timeout)

	@property
	def name(self) -> str:
		return 'frankfurter'

	async def _request(self, endpoint: str, params: dict) -> dict:
		url = f'{self.base_url}/{endpoint}'

		try:
			response = await self._client.get(url, params=params)
			response.raise_for_status()
		except httpx.HTTPStatusError as e:
			raise UpstreamError(
				f'Frankfurter HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise UpstreamError(f'Frankfurter request failed: {e.__class__.__name__}') from e

		try:
			data = response.json(parse_float=Decimal)
		except ValueError as e:
			raise DeserializationError(f'Frankfurter response parsing error: {e}') from e

		if not isinstance(data, dict):
			raise DeserializationError('Frankfurter response is not a JSON object')
		return data

	async def fetch_latest(self, base: str) -> RateSnapshot:
		data = await self._request('latest', {'base': base})
		return RateSnapshot(base=_read_base(data), rates=_read_rates(data.get('rates')))

	async def fetch_range(self, base: str, start_date: date, end_date: date) -> HistoricalRateSet:
		endpoint = f'{start_date.isoformat()}..{end_date.isoformat()}'
		data = await self._request(endpoint, {'base': base})

		raw_rates = data.get('rates')
		if not isinstance(raw_rates, dict):
			raise DeserializationError('Frankfurter response is missing the rates object')

		rates = {}
		for key, day_rates in raw_rates.items():
			try:
				day = date.fromisoformat(key)
			except (TypeError, ValueError) as e:
				raise DeserializationError(f'Invalid date key in Frankfurter response: {key!r}') from e
			rates[day] = _read_rates(day_rates)

		return HistoricalRateSet(base=_read_base(data), rates=rates)

	async def close(self) -> None:
		await self._client.aclose()


def _read_base(data: dict) -> str:
	base = data.get('base')
	if not isinstance(base, str) or not base:
		raise DeserializationError('Frankfurter response is missing the base currency')
	return base.upper()


def _read_rates(raw: object) -> dict[str, Decimal]:
	if not isinstance(raw, dict):
		raise DeserializationError('Frankfurter response is missing the rates object')

	rates = {}
	for code, value in raw.items():
		if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
			raise DeserializationError(f'Invalid rate for {code}: {value!r}')
		rates[code.upper()] = Decimal(str(value))
	return rates
