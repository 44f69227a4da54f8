from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from application.services.currency_service import CurrencyService
from application.services.historical_service import HistoricalRateService
from application.services.rate_service import RateService
from domain.exceptions.currency import InvalidDateRangeError, InvalidPaginationError
from domain.models.currency import HistoricalRateSet


@pytest.fixture
def mock_rate_service():
	service = AsyncMock(spec=RateService)
	service.get_historical_rates.return_value = HistoricalRateSet(
		base='USD',
		rates={
			date(2020, 1, 1): {'EUR': Decimal('0.89')},
			date(2020, 1, 2): {'EUR': Decimal('0.90')},
			date(2020, 1, 3): {'EUR': Decimal('0.91')},
		},
	)
	return service


@pytest.fixture
def historical_service(mock_rate_service):
	return HistoricalRateService(rate_service=mock_rate_service, currency_service=CurrencyService())


@pytest.mark.asyncio
async def test_returns_requested_page(historical_service, mock_rate_service):
	result = await historical_service.get_historical_rates(
		'usd', date(2020, 1, 1), date(2020, 1, 3), page=2, page_size=2
	)

	assert result.total_count == 3
	assert result.current_page == 2
	assert list(result.data[0].rates) == [date(2020, 1, 3)]
	mock_rate_service.get_historical_rates.assert_awaited_once_with(
		'USD', date(2020, 1, 1), date(2020, 1, 3), cancel_event=None
	)


@pytest.mark.asyncio
async def test_same_start_and_end_date_allowed(historical_service):
	result = await historical_service.get_historical_rates(
		'USD', date(2020, 1, 1), date(2020, 1, 1), page=1, page_size=10
	)

	assert result.total_count == 3


@pytest.mark.asyncio
async def test_end_before_start_rejected_without_fetch(historical_service, mock_rate_service):
	with pytest.raises(InvalidDateRangeError):
		await historical_service.get_historical_rates(
			'USD', date(2020, 1, 5), date(2020, 1, 1), page=1, page_size=10
		)

	mock_rate_service.get_historical_rates.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize('page, page_size', [(0, 10), (1, 0)])
async def test_zero_page_values_rejected_without_fetch(historical_service, mock_rate_service, page, page_size):
	with pytest.raises(InvalidPaginationError):
		await historical_service.get_historical_rates(
			'USD', date(2020, 1, 1), date(2020, 1, 2), page=page, page_size=page_size
		)

	mock_rate_service.get_historical_rates.assert_not_awaited()
