from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_executor
from api.schemas import HealthResponse
from infrastructure.resilience import CallExecutor

router = APIRouter(prefix='/api', tags=['health'])


@router.get('/health', response_model=HealthResponse, summary='Service health check')
async def health_check(executor: Annotated[CallExecutor, Depends(get_executor)]) -> HealthResponse:
	bulkhead = executor.bulkhead.snapshot()
	saturated = bulkhead['queued'] >= bulkhead['max_queued'] and bulkhead['in_flight'] >= bulkhead['max_concurrent']
	return HealthResponse(
		status='degraded' if saturated else 'healthy',
		timestamp=datetime.now(UTC),
		bulkhead=bulkhead,
	)
