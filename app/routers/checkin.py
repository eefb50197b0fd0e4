from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from ..checkin import INVALID_CODE, STATUS_ERROR, CheckInResult, Clock, check_in
from ..deps import get_clock, get_db
from ..entry_codes import is_uuid
from ..schemas import CheckInInvalidOut, CheckInOut, CheckInRequest, ErrorResponse


router = APIRouter(prefix="/api", tags=["check-in"])  # public, called by scanning devices


def result_payload(result: CheckInResult) -> dict:
    if result.is_invalid:
        return {"status": STATUS_ERROR, "message": INVALID_CODE}
    return {
        "status": result.status,
        "nombre_apellido": result.full_name,
        "fecha_ingreso": result.check_in_date,
        "hora_ingreso": result.check_in_time,
    }


@router.post(
    "/check-in",
    response_model=Union[CheckInOut, CheckInInvalidOut],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def post_check_in(
    payload: Optional[CheckInRequest] = Body(default=None),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> dict:
    payload = payload or CheckInRequest()
    if not payload.codigo_entrada:
        raise HTTPException(status_code=400, detail="codigo_entrada is required")
    if not payload.escaner:
        raise HTTPException(status_code=400, detail="escaner is required")
    if not is_uuid(payload.codigo_entrada):
        raise HTTPException(status_code=400, detail="Invalid UUID format")

    return result_payload(check_in(db, payload.codigo_entrada, payload.escaner, clock))
