"""GET /api/loan-history - Fetch all recorded decisions"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request

from underwriting_gateway.api.v1.schemas import HistoryItem
from underwriting_gateway.api.dependencies import get_recorder, get_request_id
from underwriting_gateway.config import settings
from underwriting_gateway.domain.exceptions import StoreError
from underwriting_gateway.domain.recorder import DecisionRecorder
from underwriting_gateway.infrastructure.observability.metrics import store_failures_counter

router = APIRouter()


@router.get("/loan-history", response_model=List[HistoryItem])
def get_loan_history(
    request: Request,
    recorder: DecisionRecorder = Depends(get_recorder),
):
    """
    Retrieve every underwriting decision, oldest first.

    Returns:
        List of records with application fields, ratios, decision and reason
    """
    try:
        records = recorder.list()
    except StoreError as e:
        store_failures_counter.labels(operation=e.operation).inc()
        logging.error(f"History read failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(
            status_code=503,
            detail={
                "code": "history_unavailable",
                "message": "Decision history is temporarily unavailable",
                "retryable": True,
            },
            headers={"Retry-After": str(settings.history_retry_after_seconds)},
        )

    return [HistoryItem.from_record(r) for r in records]
