from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..checkin import find_guest
from ..config import Settings
from ..deps import get_db, get_settings_dep
from ..entry_codes import invitation_url
from ..schemas import InvitationOut
from ..utils import is_confirmed


router = APIRouter(prefix="/api", tags=["invitations"])  # public, backs the invitation page


@router.get("/invitations/{codigo_entrada}", response_model=InvitationOut)
def invitation_get(
    codigo_entrada: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    guest = find_guest(db, codigo_entrada)
    if guest is None:
        raise HTTPException(status_code=404, detail="Invitation not found")
    return InvitationOut(
        codigo_entrada=guest.entry_code,
        nombre_apellido=guest.full_name,
        confirmado=is_confirmed(guest.confirmation),
        invitacion_url=invitation_url(settings.public_base_url, guest.entry_code),
    )
