from datetime import date, datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Rates and amounts go over the wire as JSON numbers, like the rate source sends them.
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used='json')]


class CamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LatestRatesResponse(CamelModel):
	base: str = Field(..., description='Base currency code')
	rates: dict[str, JsonDecimal] = Field(..., description='Rate per currency code')

	model_config = ConfigDict(
		json_schema_extra={'example': {'base': 'USD', 'rates': {'EUR': 0.85, 'GBP': 0.75}}}
	)


class ConversionResponse(CamelModel):
	source_currency: str = Field(..., description='Source currency code')
	target_currency: str = Field(..., description='Target currency code')
	amount: JsonDecimal = Field(..., description='Original amount requested')
	rate: JsonDecimal = Field(..., description='Exchange rate used for conversion')
	converted_amount: JsonDecimal = Field(..., description='Converted amount')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'sourceCurrency': 'USD',
				'targetCurrency': 'EUR',
				'amount': 100.00,
				'rate': 0.85,
				'convertedAmount': 85.00,
			}
		}
	)


class HistoricalRatesResponse(CamelModel):
	base: str = Field(..., description='Base currency code')
	rates: dict[date, dict[str, JsonDecimal]] = Field(..., description='Rates per date')


class PaginatedHistoricalRatesResponse(CamelModel):
	data: list[HistoricalRatesResponse]
	total_count: int = Field(..., description='Number of dates across all pages')
	current_page: int
	page_size: int


class HealthResponse(CamelModel):
	status: str = Field(..., description='Overall service status')
	timestamp: datetime = Field(..., description='When the health check was performed')
	bulkhead: dict[str, int] = Field(..., description='Upstream call slots in use and queued')


class ErrorResponse(BaseModel):
	error: str = Field(..., description='Error kind')
	detail: str = Field(..., description='Human-readable error message')
