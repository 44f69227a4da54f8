from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from application.services.conversion_service import ConversionService
from application.services.currency_service import CurrencyService
from application.services.rate_service import RateService
from domain.exceptions.currency import (
	ErrorKind,
	ExcludedCurrencyError,
	InvalidAmountError,
	InvalidCurrencyError,
	UnsupportedTargetCurrencyError,
	UpstreamError,
)
from domain.models.currency import ConversionRequest, RateSnapshot


@pytest.fixture
def mock_rate_service():
	service = AsyncMock(spec=RateService)
	service.get_rates_for_conversion.return_value = RateSnapshot(
		base='USD', rates={'EUR': Decimal('0.85'), 'GBP': Decimal('0.75')}
	)
	return service


@pytest.fixture
def conversion_service(mock_rate_service):
	return ConversionService(rate_service=mock_rate_service, currency_service=CurrencyService())


@pytest.mark.asyncio
async def test_convert_multiplies_amount_by_rate(conversion_service, mock_rate_service):
	result = await conversion_service.convert(ConversionRequest(Decimal('100'), 'USD', 'EUR'))

	assert result.converted_amount == Decimal('85.00')
	assert result.rate == Decimal('0.85')
	assert result.source_currency == 'USD'
	assert result.target_currency == 'EUR'
	mock_rate_service.get_rates_for_conversion.assert_awaited_once_with('USD', cancel_event=None)


@pytest.mark.asyncio
async def test_convert_uses_exact_decimal_arithmetic(conversion_service):
	result = await conversion_service.convert(ConversionRequest(Decimal('0.1'), 'USD', 'GBP'))

	assert result.converted_amount == Decimal('0.075')


@pytest.mark.asyncio
async def test_convert_normalizes_lowercase_codes(conversion_service, mock_rate_service):
	result = await conversion_service.convert(ConversionRequest(Decimal('10'), 'usd', 'eur'))

	assert result.target_currency == 'EUR'
	mock_rate_service.get_rates_for_conversion.assert_awaited_once_with('USD', cancel_event=None)


@pytest.mark.asyncio
@pytest.mark.parametrize(
	'source, target',
	[('TRY', 'USD'), ('USD', 'pln'), ('thb', 'EUR'), ('USD', 'Mxn')],
)
async def test_excluded_currency_rejected_before_fetch(conversion_service, mock_rate_service, source, target):
	with pytest.raises(ExcludedCurrencyError) as exc_info:
		await conversion_service.convert(ConversionRequest(Decimal('100'), source, target))

	assert exc_info.value.kind is ErrorKind.EXCLUDED_CURRENCY
	mock_rate_service.get_rates_for_conversion.assert_not_awaited()


@pytest.mark.asyncio
async def test_excluded_check_runs_before_amount_check(conversion_service):
	with pytest.raises(ExcludedCurrencyError):
		await conversion_service.convert(ConversionRequest(Decimal('-1'), 'TRY', 'USD'))


@pytest.mark.asyncio
@pytest.mark.parametrize('amount', [Decimal('0'), Decimal('-5'), Decimal('-0.01')])
async def test_non_positive_amount_rejected_before_fetch(conversion_service, mock_rate_service, amount):
	with pytest.raises(InvalidAmountError):
		await conversion_service.convert(ConversionRequest(amount, 'USD', 'EUR'))

	mock_rate_service.get_rates_for_conversion.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_target_currency_is_explicit_failure(conversion_service):
	with pytest.raises(UnsupportedTargetCurrencyError) as exc_info:
		await conversion_service.convert(ConversionRequest(Decimal('100'), 'USD', 'JPY'))

	assert exc_info.value.kind is ErrorKind.UNSUPPORTED_TARGET_CURRENCY


@pytest.mark.asyncio
async def test_malformed_code_rejected(conversion_service, mock_rate_service):
	with pytest.raises(InvalidCurrencyError):
		await conversion_service.convert(ConversionRequest(Decimal('100'), 'US', 'EUR'))

	mock_rate_service.get_rates_for_conversion.assert_not_awaited()


@pytest.mark.asyncio
async def test_upstream_failure_is_distinguishable(conversion_service, mock_rate_service):
	mock_rate_service.get_rates_for_conversion.side_effect = UpstreamError('unavailable')

	with pytest.raises(UpstreamError) as exc_info:
		await conversion_service.convert(ConversionRequest(Decimal('100'), 'USD', 'EUR'))

	assert exc_info.value.kind is ErrorKind.UPSTREAM_FAILURE


@pytest.mark.asyncio
async def test_custom_excluded_set_is_honoured(mock_rate_service):
	service = ConversionService(
		rate_service=mock_rate_service, currency_service=CurrencyService(excluded_currencies=['gbp'])
	)

	with pytest.raises(ExcludedCurrencyError):
		await service.convert(ConversionRequest(Decimal('100'), 'USD', 'GBP'))

	result = await service.convert(ConversionRequest(Decimal('100'), 'USD', 'EUR'))
	assert result.converted_amount == Decimal('85.00')
