from enum import Enum


class ErrorKind(str, Enum):
	INVALID_AMOUNT = 'invalid_amount'
	INVALID_PAGINATION = 'invalid_pagination'
	EXCLUDED_CURRENCY = 'excluded_currency'
	INVALID_DATE_RANGE = 'invalid_date_range'
	INVALID_CURRENCY = 'invalid_currency'
	REJECTED = 'rejected'
	UPSTREAM_FAILURE = 'upstream_failure'
	DESERIALIZATION_FAILURE = 'deserialization_failure'
	UNSUPPORTED_TARGET_CURRENCY = 'unsupported_target_currency'
	CANCELLED = 'cancelled'


class ExchangeError(Exception):
	"""Base class for every failure the gateway reports to its callers."""

	kind: ErrorKind
	retryable: bool = False


class ValidationError(ExchangeError):
	pass


class InvalidAmountError(ValidationError):
	kind = ErrorKind.INVALID_AMOUNT


class InvalidPaginationError(ValidationError):
	kind = ErrorKind.INVALID_PAGINATION


class ExcludedCurrencyError(ValidationError):
	kind = ErrorKind.EXCLUDED_CURRENCY


class InvalidDateRangeError(ValidationError):
	kind = ErrorKind.INVALID_DATE_RANGE


class InvalidCurrencyError(ValidationError):
	kind = ErrorKind.INVALID_CURRENCY


class BulkheadRejectedError(ExchangeError):
	kind = ErrorKind.REJECTED


class UpstreamError(ExchangeError):
	kind = ErrorKind.UPSTREAM_FAILURE
	retryable = True


class DeserializationError(ExchangeError):
	kind = ErrorKind.DESERIALIZATION_FAILURE
	retryable = True


class UnsupportedTargetCurrencyError(ExchangeError):
	kind = ErrorKind.UNSUPPORTED_TARGET_CURRENCY


class CallCancelledError(ExchangeError):
	kind = ErrorKind.CANCELLED
