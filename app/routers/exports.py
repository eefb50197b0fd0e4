from __future__ import annotations

import csv
import io
from typing import Iterable, List

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..deps import get_db, require_token
from ..models import GuestEntry
from ..utils import guest_status


router = APIRouter(prefix="/api", tags=["exports"], dependencies=[Depends(require_token)])

GUEST_FIELDS = [
    "nro",
    "codigo_entrada",
    "nombre_apellido",
    "confirmacion",
    "estado",
    "gastos_pendientes",
    "monto",
    "escaner",
    "fecha_ingreso",
    "hora_ingreso",
]


def _stream_csv(rows: Iterable[dict], filename: str, header_fields: List[str]) -> StreamingResponse:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=header_fields)
    writer.writeheader()
    writer.writerows(rows)
    buffer.seek(0)
    headers = {"Content-Disposition": f"attachment; filename={filename}"}
    return StreamingResponse(iter([buffer.getvalue()]), media_type="text/csv", headers=headers)


@router.get("/export.guests.csv")
def export_guests(db: Session = Depends(get_db)):
    items = db.execute(select(GuestEntry).order_by(GuestEntry.full_name)).scalars().all()
    rows = (
        {
            "nro": g.number if g.number is not None else "",
            "codigo_entrada": g.entry_code,
            "nombre_apellido": g.full_name,
            "confirmacion": g.confirmation or "",
            "estado": guest_status(g),
            "gastos_pendientes": g.pending_expenses or "",
            "monto": g.amount if g.amount is not None else "",
            "escaner": g.scanner or "",
            "fecha_ingreso": g.check_in_date.isoformat() if g.check_in_date else "",
            "hora_ingreso": g.check_in_time.strftime("%H:%M:%S") if g.check_in_time else "",
        }
        for g in items
    )
    return _stream_csv(rows, "guests.csv", GUEST_FIELDS)
