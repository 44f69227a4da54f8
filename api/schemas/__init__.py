from .requests import ConversionRequest
from .responses import (
	ConversionResponse,
	ErrorResponse,
	HealthResponse,
	HistoricalRatesResponse,
	LatestRatesResponse,
	PaginatedHistoricalRatesResponse,
)

__all__ = [
	'ConversionRequest',
	'ConversionResponse',
	'ErrorResponse',
	'HealthResponse',
	'HistoricalRatesResponse',
	'LatestRatesResponse',
	'PaginatedHistoricalRatesResponse',
]
