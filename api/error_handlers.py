import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from domain.exceptions.currency import (
	BulkheadRejectedError,
	CallCancelledError,
	DeserializationError,
	ExchangeError,
	UnsupportedTargetCurrencyError,
	UpstreamError,
	ValidationError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, exc: ExchangeError, detail: str | None = None) -> JSONResponse:
	return JSONResponse(
		status_code=status_code,
		content={'error': exc.kind.value, 'detail': detail or str(exc)},
	)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(ValidationError)
	async def validation_error_handler(request: Request, exc: ValidationError):
		return _error_response(status.HTTP_400_BAD_REQUEST, exc)

	@app.exception_handler(UnsupportedTargetCurrencyError)
	async def unsupported_target_handler(request: Request, exc: UnsupportedTargetCurrencyError):
		return _error_response(422, exc)

	@app.exception_handler(BulkheadRejectedError)
	async def rejected_handler(request: Request, exc: BulkheadRejectedError):
		return _error_response(status.HTTP_429_TOO_MANY_REQUESTS, exc)

	@app.exception_handler(UpstreamError)
	async def upstream_error_handler(request: Request, exc: UpstreamError):
		logger.error(f'Upstream error on {request.url.path}: {exc}')
		return _error_response(
			status.HTTP_503_SERVICE_UNAVAILABLE, exc, 'Exchange rate service unavailable'
		)

	@app.exception_handler(DeserializationError)
	async def deserialization_error_handler(request: Request, exc: DeserializationError):
		logger.error(f'Unreadable upstream response on {request.url.path}: {exc}')
		return _error_response(
			status.HTTP_503_SERVICE_UNAVAILABLE, exc, 'Exchange rate service unavailable'
		)

	@app.exception_handler(CallCancelledError)
	async def cancelled_handler(request: Request, exc: CallCancelledError):
		return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc, 'Request cancelled')
