import asyncio
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import (
	get_cancel_event,
	get_conversion_service,
	get_currency_service,
	get_historical_service,
	get_rate_service,
)
from api.schemas import (
	ConversionRequest,
	ConversionResponse,
	ErrorResponse,
	HistoricalRatesResponse,
	LatestRatesResponse,
	PaginatedHistoricalRatesResponse,
)
from application.services import (
	ConversionService,
	CurrencyService,
	HistoricalRateService,
	RateService,
)
from domain.models.currency import ConversionRequest as ConversionInput

router = APIRouter(prefix='/api/exchange', tags=['exchange'])

ERROR_RESPONSES = {
	400: {'model': ErrorResponse, 'description': 'Invalid request'},
	429: {'model': ErrorResponse, 'description': 'Too many concurrent requests'},
	503: {'model': ErrorResponse, 'description': 'Rate source unavailable'},
}


@router.get(
	'/latestrates',
	response_model=LatestRatesResponse,
	status_code=status.HTTP_200_OK,
	responses=ERROR_RESPONSES,
	summary='Get latest rates for a base currency',
)
async def get_latest_rates(
	base_currency: Annotated[str, Query(alias='baseCurrency')],
	service: Annotated[RateService, Depends(get_rate_service)],
	currency_service: Annotated[CurrencyService, Depends(get_currency_service)],
	cancel_event: Annotated[asyncio.Event | None, Depends(get_cancel_event)],
) -> LatestRatesResponse:
	base = currency_service.normalize(base_currency)
	snapshot = await service.get_latest_rates(base, cancel_event=cancel_event)
	return LatestRatesResponse(base=snapshot.base, rates=dict(snapshot.rates))


@router.post(
	'/convertcurrency',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	responses={**ERROR_RESPONSES, 422: {'model': ErrorResponse, 'description': 'Target currency not offered'}},
	summary='Convert an amount between two currencies',
)
async def convert_currency(
	request: ConversionRequest,
	service: Annotated[ConversionService, Depends(get_conversion_service)],
	cancel_event: Annotated[asyncio.Event | None, Depends(get_cancel_event)],
) -> ConversionResponse:
	result = await service.convert(
		ConversionInput(
			amount=request.amount,
			source_currency=request.source_currency,
			target_currency=request.target_currency,
		),
		cancel_event=cancel_event,
	)
	return ConversionResponse(
		source_currency=result.source_currency,
		target_currency=result.target_currency,
		amount=result.amount,
		rate=result.rate,
		converted_amount=result.converted_amount,
	)


@router.get(
	'/historicalrates',
	response_model=PaginatedHistoricalRatesResponse,
	status_code=status.HTTP_200_OK,
	responses=ERROR_RESPONSES,
	summary='Get paginated historical rates for a date range',
)
async def get_historical_rates(
	base_currency: Annotated[str, Query(alias='baseCurrency')],
	start_date: Annotated[date, Query(alias='startDate')],
	end_date: Annotated[date, Query(alias='endDate')],
	page: Annotated[int, Query()],
	page_size: Annotated[int, Query(alias='pageSize')],
	service: Annotated[HistoricalRateService, Depends(get_historical_service)],
	cancel_event: Annotated[asyncio.Event | None, Depends(get_cancel_event)],
) -> PaginatedHistoricalRatesResponse:
	result = await service.get_historical_rates(
		base_currency, start_date, end_date, page, page_size, cancel_event=cancel_event
	)
	return PaginatedHistoricalRatesResponse(
		data=[
			HistoricalRatesResponse(
				base=rate_set.base,
				rates={day: dict(day_rates) for day, day_rates in rate_set.rates.items()},
			)
			for rate_set in result.data
		],
		total_count=result.total_count,
		current_page=result.current_page,
		page_size=result.page_size,
	)
