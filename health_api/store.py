# health_api/store.py
"""
Cliente del store externo (base de documentos con API GraphQL).
Una sola operacion: la mutacion addEntry con la entrada diaria.
"""
from typing import Any, Dict, List, Optional

import httpx

from health_api.config import Settings
from health_api.logger import get_logger
from health_api.models import DailyEntry

logger = get_logger(__name__)

ADD_ENTRY_MUTATION = """
mutation ($entries: [EntryInput]) {
  addEntry(entries: $entries) {
    heartRate {
      value
      timestamp
    }
    steps {
      value
      timestamp
    }
    date
  }
}
"""


class StoreError(Exception):
    """La mutacion fue rechazada por el store o no se pudo completar."""

    def __init__(self, errors: List[Dict[str, Any]], status_code: Optional[int] = None):
        self.errors = errors or [{"message": "Unknown store error"}]
        self.status_code = status_code
        super().__init__(self.first_message)

    @property
    def first_message(self) -> str:
        first = self.errors[0]
        if isinstance(first, dict):
            return str(first.get("message", first))
        return str(first)


class GraphStoreClient:
    """Cliente GraphQL sobre httpx.AsyncClient con autorizacion Bearer."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.url = settings.graphql_url
        self._client = client or httpx.AsyncClient(timeout=settings.store_timeout)
        self._headers = {"authorization": f"Bearer {settings.store_key}"}

    async def request(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Ejecuta una operacion GraphQL y devuelve el campo `data`.

        Raises:
            StoreError: error de transporte, status no 2xx o lista `errors` en la respuesta
        """
        try:
            response = await self._client.post(
                self.url,
                json={"query": query, "variables": variables or {}},
                headers=self._headers,
            )
        except httpx.HTTPError as e:
            raise StoreError([{"message": f"Store unreachable: {e}"}]) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        errors = body.get("errors")
        if errors:
            raise StoreError(list(errors), response.status_code)
        if response.is_error:
            raise StoreError(
                [{"message": f"Store responded with status {response.status_code}"}],
                response.status_code,
            )
        return body.get("data") or {}

    async def add_entry(self, entry: DailyEntry) -> Any:
        """Persiste una entrada diaria. No reintenta."""
        data = await self.request(ADD_ENTRY_MUTATION, {"entries": [entry.to_input()]})
        logger.debug(f"addEntry respondio - date: {entry.date}")
        return data.get("addEntry")

    async def aclose(self) -> None:
        await self._client.aclose()
