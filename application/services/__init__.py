from .conversion_service import ConversionService
from .currency_service import CurrencyService
from .historical_service import HistoricalRateService
from .rate_service import RateService

__all__ = ['ConversionService', 'CurrencyService', 'HistoricalRateService', 'RateService']
