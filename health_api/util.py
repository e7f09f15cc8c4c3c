"""
Utilidades para conversión de fechas y timestamps.
"""
from datetime import date, datetime, time, timezone


def to_utc(dt: datetime) -> datetime:
    """Normaliza un datetime a UTC (si no tiene tzinfo, se asume UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso8601(dt: datetime) -> str:
    """
    Formatea un datetime como ISO 8601 en UTC con milisegundos.

    Args:
        dt: datetime object (si no tiene tzinfo, se asume UTC)

    Returns:
        String con formato YYYY-MM-DDTHH:MM:SS.mmmZ
    """
    dt = to_utc(dt)
    # strftime no rellena con ceros los años < 1000
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}.{dt.microsecond // 1000:03d}Z"
    )


def utc_midnight(day: date) -> datetime:
    """Devuelve la medianoche UTC del día indicado."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def day_anchor_iso(day: date) -> str:
    """ISO 8601 de la medianoche UTC del día, ej: 2021-06-01T00:00:00.000Z"""
    return to_iso8601(utc_midnight(day))
