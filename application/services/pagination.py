from itertools import islice

from domain.exceptions.currency import InvalidPaginationError
from domain.models.currency import HistoricalRateSet, PaginatedResult


def validate_page_window(page: int, page_size: int) -> None:
	if page is None or page_size is None or page < 1 or page_size < 1:
		raise InvalidPaginationError('Page and page size must be greater than zero.')


def paginate(
	rate_set: HistoricalRateSet, page: int, page_size: int
) -> PaginatedResult[HistoricalRateSet]:
	"""Slice a historical rate set into one page of dates.

	Dates keep the order the rate source returned them in; they are not re-sorted.
	A page past the end yields a single set with no dates and the full total count.
	"""
	validate_page_window(page, page_size)

	offset = (page - 1) * page_size
	selected = dict(islice(rate_set.rates.items(), offset, offset + page_size))

	return PaginatedResult(
		data=[HistoricalRateSet(base=rate_set.base, rates=selected)],
		total_count=len(rate_set.rates),
		current_page=page,
		page_size=page_size,
	)
