import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial
from typing import TypeVar

from tenacity import (
	AsyncRetrying,
	RetryCallState,
	RetryError,
	retry_if_exception,
	stop_after_attempt,
	stop_when_event_set,
	wait_exponential,
)

from domain.exceptions.currency import (
	CallCancelledError,
	DeserializationError,
	ExchangeError,
	UpstreamError,
)
from infrastructure.resilience.bulkhead import Bulkhead

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class ResilienceConfig:
	max_concurrent: int = 10
	max_queued: int = 50
	max_attempts: int = 3
	initial_delay: float = 1.0


def _is_retryable(exc: BaseException) -> bool:
	if isinstance(exc, ExchangeError):
		return exc.retryable
	# asyncio.CancelledError and friends are BaseException only
	return isinstance(exc, Exception)


async def _backoff_sleep(cancel_event: asyncio.Event | None, seconds: float) -> None:
	if cancel_event is None:
		await asyncio.sleep(seconds)
		return
	try:
		await asyncio.wait_for(cancel_event.wait(), timeout=seconds)
	except TimeoutError:
		pass


async def _run_attempt(
	operation: Callable[[], Awaitable[T]],
	description: str,
	cancel_event: asyncio.Event | None,
) -> T:
	if cancel_event is None:
		return await operation()

	call = asyncio.ensure_future(operation())
	cancelled = asyncio.ensure_future(cancel_event.wait())
	try:
		done, _ = await asyncio.wait({call, cancelled}, return_when=asyncio.FIRST_COMPLETED)
	finally:
		cancelled.cancel()
		if not call.done():
			call.cancel()

	if call in done:
		return call.result()

	# Wait for the aborted call to unwind before giving the slot back.
	await asyncio.gather(call, return_exceptions=True)
	logger.info(f'{description} aborted mid-attempt by caller cancellation')
	raise CallCancelledError(f'{description} was cancelled')


class CallExecutor:
	"""Runs one upstream operation inside a bulkhead slot, retrying with exponential backoff.

	The slot is taken once per logical call and held across every attempt, so a
	call that keeps failing occupies capacity until its retries run out.
	"""

	def __init__(self, config: ResilienceConfig | None = None, bulkhead: Bulkhead | None = None):
		self.config = config or ResilienceConfig()
		self.bulkhead = bulkhead or Bulkhead(self.config.max_concurrent, self.config.max_queued)

	async def execute(
		self,
		operation: Callable[[], Awaitable[T]],
		description: str = 'upstream call',
		cancel_event: asyncio.Event | None = None,
	) -> T:
		async with self.bulkhead.slot():
			return await self._run_with_retry(operation, description, cancel_event)

	async def _run_with_retry(
		self,
		operation: Callable[[], Awaitable[T]],
		description: str,
		cancel_event: asyncio.Event | None,
	) -> T:
		stop = stop_after_attempt(self.config.max_attempts)
		if cancel_event is not None:
			stop = stop | stop_when_event_set(cancel_event)

		retrying = AsyncRetrying(
			stop=stop,
			wait=wait_exponential(multiplier=self.config.initial_delay, exp_base=2),
			retry=retry_if_exception(_is_retryable),
			before_sleep=partial(self._log_retry, description),
			sleep=partial(_backoff_sleep, cancel_event),
		)

		try:
			async for attempt in retrying:
				with attempt:
					if cancel_event is not None and cancel_event.is_set():
						raise CallCancelledError(f'{description} was cancelled')
					result = await _run_attempt(operation, description, cancel_event)
		except RetryError as e:
			self._raise_exhausted(description, e, cancel_event)
		return result

	def _log_retry(self, description: str, retry_state: RetryCallState) -> None:
		delay = retry_state.next_action.sleep if retry_state.next_action else 0
		exc = retry_state.outcome.exception() if retry_state.outcome else None
		logger.warning(
			f'Retry {retry_state.attempt_number} of {description} failed. '
			f'Waiting {delay:.2f}s before next retry. Exception: {exc}'
		)

	def _raise_exhausted(
		self, description: str, error: RetryError, cancel_event: asyncio.Event | None
	) -> None:
		cause = error.last_attempt.exception()
		attempts = error.last_attempt.attempt_number

		if cancel_event is not None and cancel_event.is_set():
			logger.info(f'{description} cancelled after {attempts} attempt(s): {cause}')
			raise CallCancelledError(f'{description} was cancelled') from cause

		logger.error(
			f'{description} failed after {attempts} attempt(s): {cause}',
			exc_info=(type(cause), cause, cause.__traceback__) if cause else None,
		)
		if isinstance(cause, DeserializationError):
			raise DeserializationError(
				'The rate source returned an unreadable response. Please try again later.'
			) from cause
		raise UpstreamError('The rate source is unavailable. Please try again later.') from cause
