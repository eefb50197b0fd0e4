from __future__ import annotations

from datetime import date, time
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str


# Check-in
class CheckInRequest(BaseModel):
    # Optional so that missing fields produce the endpoint's own 400 messages
    codigo_entrada: Optional[str] = None
    escaner: Optional[str] = None


class CheckInOut(BaseModel):
    status: Literal["ok", "ya_registrado"]
    nombre_apellido: str
    fecha_ingreso: Optional[str] = None
    hora_ingreso: Optional[str] = None


class CheckInInvalidOut(BaseModel):
    status: Literal["error"] = "error"
    message: Literal["codigo_invalido"] = "codigo_invalido"


# Scanner
class ScannerSession(BaseModel):
    # Debounce key; falls back to the scanner label
    session_id: Optional[str] = Field(default=None, max_length=128)
    escaner: Optional[str] = None

    def debounce_key(self, default_label: str) -> str:
        return self.session_id or self.escaner or default_label


class ScanRequest(ScannerSession):
    payload: Optional[str] = None


class ScanOut(BaseModel):
    status: Literal["ok", "ya_registrado", "error", "ignorado"]
    codigo_entrada: Optional[str] = None
    nombre_apellido: Optional[str] = None
    fecha_ingreso: Optional[str] = None
    hora_ingreso: Optional[str] = None
    message: Optional[str] = None


# Guests
class GuestOut(BaseModel):
    id: int
    nro: Optional[int] = None
    codigo_entrada: str
    nombre_apellido: str
    confirmacion: Optional[str] = None
    gastos_pendientes: Optional[str] = None
    monto: Optional[float] = None
    confirmado: bool
    estado: str
    escaner: Optional[str] = None
    fecha_ingreso: Optional[date] = None
    hora_ingreso: Optional[time] = None


class GuestsListResponse(BaseModel):
    items: List[GuestOut]
    total: int
    page: int
    page_size: int


class GuestStatsOut(BaseModel):
    total: int
    confirmados: int
    pendientes: int
    asistieron: int
    porcentaje_confirmacion: int


class InvitationOut(BaseModel):
    codigo_entrada: str
    nombre_apellido: str
    confirmado: bool
    invitacion_url: str
