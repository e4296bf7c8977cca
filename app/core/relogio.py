# app/core/relogio.py
"""
Funções de data/hora do expediente.

Todos os instantes são gravados em UTC. O "dia" do restaurante e a hora do
reset diário são sempre avaliados no fuso configurado em settings.TIMEZONE.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from app.core.config import settings


def fuso_local() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def agora() -> datetime:
    return datetime.now(timezone.utc)


def como_utc(momento: datetime) -> datetime:
    # SQLite devolve datetimes sem fuso; eles foram gravados em UTC
    if momento.tzinfo is None:
        return momento.replace(tzinfo=timezone.utc)
    return momento.astimezone(timezone.utc)


def para_local(momento: datetime) -> datetime:
    return como_utc(momento).astimezone(fuso_local())


def data_local(momento: Optional[datetime] = None) -> date:
    return para_local(momento or agora()).date()


def inicio_do_dia(dia: date) -> datetime:
    return datetime.combine(dia, time.min, tzinfo=fuso_local()).astimezone(timezone.utc)


def janela_do_dia(dia: date) -> Tuple[datetime, datetime]:
    """Intervalo [início, fim) do dia local, em UTC."""
    return inicio_do_dia(dia), inicio_do_dia(dia + timedelta(days=1))


def horario_de_reset(dia: date) -> datetime:
    hora = time(hour=settings.DAILY_RESET_HOUR)
    return datetime.combine(dia, hora, tzinfo=fuso_local()).astimezone(timezone.utc)
