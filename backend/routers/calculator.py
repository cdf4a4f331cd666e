from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from database import get_db
from calculator import calculate_checked, parse_calculation_inputs
from calculator.adapter import load_autofill_inputs
from schemas.calculator import (
    AutoFillResponse,
    BatchCalculationRequest,
    CalculationResponse,
)
from routers.batch import get_owned_batch
from utils.auth_utils import RequestContext, get_request_context
from utils.formatting import format_calculation_result

import logging
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/calculator",
    tags=["Feed Calculator"],
)


@router.post("/calculate", response_model=CalculationResponse)
def calculate(payload: Dict[str, Any] = Body(...)):
    """
    Manual mode: all five fields come from the caller. No account required.

    Invalid input is rejected with 422 before anything is calculated, and so is
    a result too large to represent.
    """
    inputs = parse_calculation_inputs(payload)
    result = calculate_checked(inputs)
    return CalculationResponse(inputs=inputs, result=result, formatted=format_calculation_result(result))


@router.get("/autofill/{batch_id}", response_model=AutoFillResponse)
def autofill(
    batch_id: int,
    sequence: Optional[int] = None,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    """
    Derives calculator fields from the batch's records.

    The optional sequence number is echoed back so the client can drop
    responses for a batch it has since deselected.
    """
    db_batch = get_owned_batch(db, batch_id, context)
    autofill_inputs = load_autofill_inputs(db, db_batch, tenant_id=context.tenant_id)
    logger.info("Auto-filled calculator for batch_id=%d (sequence=%s)", batch_id, sequence)
    return AutoFillResponse(**autofill_inputs.model_dump(), sequence=sequence)


@router.post("/batches/{batch_id}", response_model=CalculationResponse)
def calculate_for_batch(
    batch_id: int,
    request: BatchCalculationRequest,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    """Auto-fill from the batch, then calculate with the caller's feed cost per bag."""
    db_batch = get_owned_batch(db, batch_id, context)
    autofill_inputs = load_autofill_inputs(db, db_batch, tenant_id=context.tenant_id)
    inputs = parse_calculation_inputs({
        "initial_chick_count": autofill_inputs.initial_chick_count,
        "final_chick_count": autofill_inputs.final_chick_count,
        "feed_cost_per_bag": request.feed_cost_per_bag,
        "bags_of_feed_used": autofill_inputs.bags_of_feed_used,
        "average_chick_weight": autofill_inputs.average_chick_weight,
    })
    result = calculate_checked(inputs)
    return CalculationResponse(inputs=inputs, result=result, formatted=format_calculation_result(result), batch_id=batch_id)
