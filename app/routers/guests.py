from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..deps import get_db, require_token
from ..models import GuestEntry
from ..schemas import GuestOut, GuestsListResponse, GuestStatsOut
from ..utils import (
    GUEST_STATUSES,
    STATUS_ATTENDED,
    STATUS_CONFIRMED,
    STATUS_PENDING,
    filter_guests,
    guest_status,
    is_confirmed,
)


router = APIRouter(prefix="/api", tags=["guests"], dependencies=[Depends(require_token)])


@router.get("/guests.list", response_model=GuestsListResponse)
def guests_list(
    db: Session = Depends(get_db),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=500),
    q: Optional[str] = None,
    status: Optional[str] = None,
):
    if status and status not in GUEST_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status")
    guests = db.execute(select(GuestEntry).order_by(GuestEntry.full_name)).scalars().all()
    matched = filter_guests(guests, q)
    if status:
        matched = [g for g in matched if guest_status(g) == status]

    items = matched[(page - 1) * page_size : page * page_size]
    return {
        "items": [_guest_out(g) for g in items],
        "total": len(matched),
        "page": page,
        "page_size": page_size,
    }


@router.get("/guests.stats", response_model=GuestStatsOut)
def guests_stats(db: Session = Depends(get_db)):
    guests = db.execute(select(GuestEntry)).scalars().all()
    statuses = [guest_status(g) for g in guests]
    total = len(statuses)
    confirmed = statuses.count(STATUS_CONFIRMED)
    return {
        "total": total,
        "confirmados": confirmed,
        "pendientes": statuses.count(STATUS_PENDING),
        "asistieron": statuses.count(STATUS_ATTENDED),
        "porcentaje_confirmacion": round(confirmed / total * 100) if total else 0,
    }


def _guest_out(g: GuestEntry) -> GuestOut:
    return GuestOut(
        id=g.id,
        nro=g.number,
        codigo_entrada=g.entry_code,
        nombre_apellido=g.full_name,
        confirmacion=g.confirmation,
        gastos_pendientes=g.pending_expenses,
        monto=g.amount,
        confirmado=is_confirmed(g.confirmation),
        estado=guest_status(g),
        escaner=g.scanner,
        fecha_ingreso=g.check_in_date,
        hora_ingreso=g.check_in_time,
    )
