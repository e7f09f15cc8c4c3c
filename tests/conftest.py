"""
Fixtures compartidas: configuracion de prueba y un store falso en memoria.
"""
import pytest

from health_api.config import Settings


class FakeStore:
    """Reemplaza al cliente GraphQL; guarda las entradas recibidas."""

    def __init__(self, error=None):
        self.entries = []
        self.error = error

    async def add_entry(self, entry):
        self.entries.append(entry)
        if self.error is not None:
            raise self.error
        return [entry.to_input()]


@pytest.fixture
def settings():
    return Settings(store_key="fauna-secret", auth_key="shortcut-secret")


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def payload():
    """Export tipico del atajo: 3 lecturas de heart rate y 4 de steps (dos en cero)."""
    return {
        "heart": {
            "values": "62\n75\n0",
            "timestamps": "2021-06-01T08:00:00+02:00\n2021-06-01T08:05:00+02:00\n2021-06-01T08:10:00+02:00",
        },
        "steps": {
            "values": "0\n120\n0\n845",
            "timestamps": "2021-06-01T08:00:00Z\n2021-06-01T09:00:00Z\n2021-06-01T10:00:00Z\n2021-06-01T11:00:00Z",
        },
        "date": "2021-06-01",
    }


@pytest.fixture
def make_store():
    return FakeStore
