import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from domain.exceptions.currency import BulkheadRejectedError

logger = logging.getLogger(__name__)


class Bulkhead:
	"""Bounds concurrent upstream calls and the number of callers allowed to wait for one.

	At most ``max_concurrent`` holders run at once and at most ``max_queued`` more
	wait for a slot. Anyone arriving beyond that is rejected straight away.
	"""

	def __init__(self, max_concurrent: int = 10, max_queued: int = 50):
		if max_concurrent < 1:
			raise ValueError('max_concurrent must be at least 1')
		if max_queued < 0:
			raise ValueError('max_queued cannot be negative')

		self.max_concurrent = max_concurrent
		self.max_queued = max_queued
		self._semaphore = asyncio.Semaphore(max_concurrent)
		self._occupied = 0
		self._in_flight = 0

	@property
	def in_flight(self) -> int:
		return self._in_flight

	@property
	def queued(self) -> int:
		return self._occupied - self._in_flight

	@asynccontextmanager
	async def slot(self) -> AsyncIterator[None]:
		# No await between the check and the increment: atomic on the event loop.
		if self._occupied >= self.max_concurrent + self.max_queued:
			logger.warning(
				f'Bulkhead limit reached ({self._in_flight} running, {self.queued} queued). Request rejected.'
			)
			raise BulkheadRejectedError('Too many concurrent requests, please try again later')

		self._occupied += 1
		try:
			async with self._semaphore:
				self._in_flight += 1
				try:
					yield
				finally:
					self._in_flight -= 1
		finally:
			self._occupied -= 1

	def snapshot(self) -> dict:
		return {
			'in_flight': self.in_flight,
			'queued': self.queued,
			'max_concurrent': self.max_concurrent,
			'max_queued': self.max_queued,
		}
