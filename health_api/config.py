"""
Configuración centralizada del servicio.
Todas las variables de entorno se leen aquí y se agrupan en un objeto Settings
que se pasa explícitamente a la app, al handler y al cliente del store.
"""
import os
from dataclasses import dataclass

# ============================================================================
# Store (GraphQL) Configuration
# ============================================================================
DEFAULT_GRAPHQL_URL = "https://graphql.fauna.com/graphql"
DEFAULT_STORE_TIMEOUT = 30.0  # segundos

# ============================================================================
# Server Configuration
# ============================================================================
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000

# ============================================================================
# Request Configuration
# ============================================================================
AUTH_HEADER = "x-key"
INGEST_PATH = "/api/health"

# ============================================================================
# Test/Development Configuration
# ============================================================================
BASE_URL = os.getenv("BASE_URL", "http://localhost:8000")


@dataclass(frozen=True)
class Settings:
    store_key: str = ""
    auth_key: str = ""
    graphql_url: str = DEFAULT_GRAPHQL_URL
    store_timeout: float = DEFAULT_STORE_TIMEOUT
    log_level: str = "INFO"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> "Settings":
        """Construye la configuración a partir de las variables de entorno."""
        return cls(
            store_key=os.getenv("FAUNA_KEY", ""),
            auth_key=os.getenv("API_KEY", ""),
            graphql_url=os.getenv("GRAPHQL_URL", DEFAULT_GRAPHQL_URL),
            store_timeout=float(os.getenv("STORE_TIMEOUT", str(DEFAULT_STORE_TIMEOUT))),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", DEFAULT_HOST),
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
        )

    def missing_secrets(self) -> list:
        """Nombres de las variables secretas que no están configuradas."""
        missing = []
        if not self.store_key:
            missing.append("FAUNA_KEY")
        if not self.auth_key:
            missing.append("API_KEY")
        return missing
