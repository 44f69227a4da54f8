from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Generic, TypeVar

T = TypeVar('T')


def _freeze(rates: Mapping[str, Decimal]) -> Mapping[str, Decimal]:
	return MappingProxyType(dict(rates))


@dataclass(frozen=True)
class RateSnapshot:
	base: str
	rates: Mapping[str, Decimal]

	def __post_init__(self):
		object.__setattr__(self, 'rates', _freeze(self.rates))


@dataclass(frozen=True)
class HistoricalRateSet:
	"""Rates per calendar date, keyed in the order the upstream returned them."""

	base: str
	rates: Mapping[date, Mapping[str, Decimal]]

	def __post_init__(self):
		frozen = {day: _freeze(day_rates) for day, day_rates in self.rates.items()}
		object.__setattr__(self, 'rates', MappingProxyType(frozen))


@dataclass(frozen=True)
class ConversionRequest:
	amount: Decimal
	source_currency: str
	target_currency: str

	def normalized(self) -> 'ConversionRequest':
		return ConversionRequest(
			amount=self.amount,
			source_currency=self.source_currency.upper(),
			target_currency=self.target_currency.upper(),
		)


@dataclass(frozen=True)
class ConversionResult:
	source_currency: str
	target_currency: str
	amount: Decimal
	rate: Decimal
	converted_amount: Decimal


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
	data: list[T] = field(default_factory=list)
	total_count: int = 0
	current_page: int = 1
	page_size: int = 1
