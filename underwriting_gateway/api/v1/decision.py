"""POST /api/request-loan - mortgage underwriting decision endpoint"""

import time
import logging
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException, Request

from underwriting_gateway.api.v1.schemas import DecisionResponse, FieldErrorSchema, ValidationErrorDetail
from underwriting_gateway.api.dependencies import get_recorder, get_request_id
from underwriting_gateway.domain.recorder import DecisionRecorder
from underwriting_gateway.domain.validation import validate
from underwriting_gateway.domain.policy import make_underwriting_decision
from underwriting_gateway.domain.exceptions import ComputationError, StoreError, ValidationError
from underwriting_gateway.infrastructure.observability.metrics import (
    computation_failures_counter,
    record_decision,
    store_failures_counter,
    validation_failures_counter,
)
from underwriting_gateway.infrastructure.observability.logging import log_decision

router = APIRouter()


@router.post("/request-loan", response_model=DecisionResponse)
def request_loan(
    request: Request,
    payload: Any = Body(...),
    recorder: DecisionRecorder = Depends(get_recorder),
):
    """
    Underwrite a mortgage application.

    Flow:
    1. Validate and normalize the payload (all invalid fields reported at once)
    2. Derive DTI / LTV and evaluate the ordered policy table
    3. Append the decision record to the history store
    4. Return decision, ratios and the deciding rule's reason
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        application = validate(payload)
        decision = make_underwriting_decision(application)
        record = recorder.record(
            application,
            decision.metrics,
            decision.outcome,
            decision.reason,
            decision.policy_version,
        )

    except ValidationError as e:
        validation_failures_counter.inc()
        logging.warning(f"Validation failed: {e}", extra={"request_id": request_id})
        detail = ValidationErrorDetail(
            message="Invalid loan application",
            errors=[FieldErrorSchema(field=err.field, problem=err.problem) for err in e.errors],
        )
        raise HTTPException(status_code=422, detail=detail.model_dump())

    except ComputationError as e:
        computation_failures_counter.inc()
        logging.error(f"Computation error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    except StoreError as e:
        # Decision is valid; only the history write failed
        store_failures_counter.labels(operation=e.operation).inc()
        logging.error(f"Decision not recorded: {e}", extra={"request_id": request_id})
        computed = DecisionResponse(
            decision=decision.outcome.value,
            dti=float(decision.metrics.dti),
            ltv=float(decision.metrics.ltv),
            reason=decision.reason,
        )
        raise HTTPException(
            status_code=503,
            detail={
                "code": "decision_not_recorded",
                "message": "Decision was computed but could not be recorded",
                "decision": computed.model_dump(),
            },
        )

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    response = DecisionResponse.from_record(record)
    record_decision(response.decision, response.dti, response.ltv)
    log_decision(request_id, response.decision, response.dti, response.ltv, response.reason, record.id, duration_ms)

    return response
