"""
Normalización de muestras crudas (values/timestamps separados por \\n)
a una lista ordenada de Sample.
"""
import re
from datetime import datetime
from itertools import zip_longest
from typing import List, Optional

from dateutil import parser as dtparser

from health_api.models import RawSample, Sample
from health_api.util import to_iso8601

# entero base 10, con parte decimal opcional que se trunca (ej: "72.0" -> 72)
_INT_TOKEN = re.compile(r"^([+-]?\d+)(?:\.\d*)?$")

# fechas por defecto para detectar tokens sin fecha completa
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


class SampleParseError(ValueError):
    """Una muestra no se pudo interpretar (valor no numerico, timestamp invalido o faltante)."""

    def __init__(self, reason: str, index: int, token: Optional[str], metric: Optional[str] = None):
        self.reason = reason
        self.index = index
        self.token = token
        self.metric = metric
        where = f"{metric} sample {index}" if metric else f"sample {index}"
        super().__init__(f"Invalid {where}: {reason} ({token!r})")


def _split(raw: str) -> List[str]:
    # los atajos de iOS a veces mandan \r\n
    return [token.strip() for token in raw.split("\n")]


def parse_value(token: str, index: int, metric: Optional[str] = None) -> int:
    match = _INT_TOKEN.match(token)
    if match is None:
        raise SampleParseError("value is not numeric", index, token, metric)
    return int(match.group(1), 10)


def parse_timestamp(token: Optional[str], index: int, metric: Optional[str] = None) -> str:
    """
    Parsea un timestamp (ISO 8601 o formato local del atajo) y lo devuelve en ISO 8601 UTC.

    El token tiene que traer la fecha completa: se parsea con dos fechas por
    defecto distintas y si el dia resultante cambia, faltaba algun campo
    (ej: "08:15" o "2021") y se rechaza en vez de completarlo con hoy.
    """
    if not token:
        raise SampleParseError("missing timestamp", index, token, metric)
    try:
        parsed = dtparser.parse(token, default=_DEFAULT_A)
        check = dtparser.parse(token, default=_DEFAULT_B)
        # la conversion a UTC tambien puede salirse del rango de datetime
        iso = to_iso8601(parsed)
    except (ValueError, OverflowError) as e:
        raise SampleParseError("timestamp is not a valid date", index, token, metric) from e
    if parsed.date() != check.date():
        raise SampleParseError("timestamp has no full calendar date", index, token, metric)
    return iso


def normalize(raw_values: str, raw_timestamps: str, metric: Optional[str] = None) -> List[Sample]:
    """
    Convierte un bloque de muestras crudo en una lista de Sample.

    Los tokens se emparejan por su posicion original y despues se descartan
    los pares cuyo valor esta vacio (pasa al empezar el dia, antes de que haya
    lecturas). Asi un valor vacio nunca desplaza los timestamps siguientes.

    Args:
        raw_values: enteros separados por \\n
        raw_timestamps: fechas separadas por \\n, alineadas con raw_values
        metric: nombre de la metrica, solo para los mensajes de error

    Returns:
        Lista de Sample en el mismo orden de entrada

    Raises:
        SampleParseError: valor no numerico o timestamp invalido/faltante/incompleto
    """
    samples = []
    pairs = zip_longest(_split(raw_values), _split(raw_timestamps))
    for index, (value_token, timestamp_token) in enumerate(pairs):
        if not value_token:
            continue
        samples.append(
            Sample(
                value=parse_value(value_token, index, metric),
                timestamp=parse_timestamp(timestamp_token, index, metric),
            )
        )
    return samples


def normalize_raw(raw: RawSample, metric: Optional[str] = None) -> List[Sample]:
    return normalize(raw.values, raw.timestamps, metric)
