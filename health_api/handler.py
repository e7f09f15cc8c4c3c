# health_api/handler.py
"""
Logica del endpoint de ingesta: auth -> parseo del payload -> normalizacion
de muestras -> una mutacion al store -> respuesta HTTP.
"""
import hmac
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol

from pydantic import ValidationError

from health_api.config import AUTH_HEADER, Settings
from health_api.logger import get_logger
from health_api.models import DailyEntry, IngestPayload
from health_api.samples import SampleParseError, normalize_raw
from health_api.store import StoreError
from health_api.util import day_anchor_iso

logger = get_logger(__name__)


class EntryStore(Protocol):
    async def add_entry(self, entry: DailyEntry) -> Any: ...


@dataclass
class IngestResponse:
    status_code: int
    content: Dict[str, Any]


BAD_REQUEST = IngestResponse(400, {"error": "Bad request"})
UNAUTHORIZED = IngestResponse(403, {"error": "Unauthorized"})


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Busca un header sin distinguir mayusculas/minusculas."""
    value = headers.get(name)
    if value is not None:
        return value
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return None


class IngestHandler:
    def __init__(self, settings: Settings, store: EntryStore):
        self.settings = settings
        self.store = store

    def is_authorized(self, headers: Mapping[str, str]) -> bool:
        """Compara el header x-key con el secreto configurado (sin secreto no pasa nadie)."""
        provided = _header(headers, AUTH_HEADER)
        if not self.settings.auth_key or provided is None:
            return False
        return hmac.compare_digest(provided.encode(), self.settings.auth_key.encode())

    async def handle(self, method: str, headers: Mapping[str, str], body: Any) -> IngestResponse:
        if method.upper() != "POST":
            logger.warning(f"Metodo no permitido: {method}")
            return BAD_REQUEST

        if not self.is_authorized(headers):
            logger.warning("Request rechazado: x-key invalida o ausente")
            return UNAUTHORIZED

        try:
            payload = IngestPayload.model_validate(body)
        except ValidationError as e:
            logger.warning(f"Payload invalido: {e.errors()}")
            return BAD_REQUEST

        try:
            steps = normalize_raw(payload.steps, "steps")
            heart = normalize_raw(payload.heart, "heart")
        except SampleParseError as e:
            logger.warning(f"Muestras invalidas: {e}")
            return IngestResponse(400, {"error": str(e)})

        active_steps = len([s for s in steps if s.value != 0])
        logger.info(f"Steps: {active_steps} items")
        logger.info(f"Heart Rate: {len(heart)} items")

        # la entrada siempre queda anclada a la medianoche UTC de la fecha del dispositivo
        today = day_anchor_iso(payload.date)
        entry = DailyEntry(heart_rate=heart, steps=steps, date=today)
        logger.debug(f"Entrada construida: {entry.to_input()}")

        try:
            await self.store.add_entry(entry)
        except StoreError as e:
            logger.error(f"Error al guardar la entrada en el store - date: {today}, errors: {e.errors}")
            return IngestResponse(503, {"response": e.first_message})

        logger.info(f"Heart rate y steps guardados en el store - date: {today}")
        return IngestResponse(
            200,
            {
                "response": {
                    "date": today,
                    "heart": f"{len(heart)} items",
                    "steps": f"{active_steps}",
                }
            },
        )
