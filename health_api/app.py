from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from health_api.config import INGEST_PATH, Settings
from health_api.handler import EntryStore, IngestHandler
from health_api.logger import get_logger
from health_api.store import GraphStoreClient

logger = get_logger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(settings: Optional[Settings] = None, store: Optional[EntryStore] = None) -> FastAPI:
    """
    Construye la app. Si no se inyecta un store, el cliente GraphQL se crea
    en startup con la configuracion y se cierra en shutdown.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Iniciando aplicación...")
        missing = settings.missing_secrets()
        if missing:
            logger.warning(f"Variables de entorno sin configurar: {', '.join(missing)}")
        if app.state.store is None:
            app.state.store = GraphStoreClient(settings)
            logger.info(f"Cliente GraphQL creado - url: {settings.graphql_url}")
        logger.info("Aplicación iniciada correctamente")

        yield

        logger.info("Cerrando aplicación...")
        # solo cerramos el cliente que creamos nosotros
        if store is None and isinstance(app.state.store, GraphStoreClient):
            await app.state.store.aclose()
            app.state.store = None
            logger.info("Cliente GraphQL cerrado")

    app = FastAPI(title="health-sync", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    @app.get("/health")
    async def health_check():
        """
        Health check del servicio.

        Returns:
            - status: "healthy" si la configuracion esta completa, "unhealthy" si no
            - checks: Detalle del estado de cada componente

        Status codes:
            - 200: Service is healthy
            - 503: Service is unhealthy
        """
        checks = {
            "service": "healthy",
            "configuration": "healthy",
            "store": "healthy" if app.state.store is not None else "not initialized",
        }
        overall_status = "healthy"

        missing = settings.missing_secrets()
        if missing:
            checks["configuration"] = f"unhealthy: missing {', '.join(missing)}"
            overall_status = "unhealthy"
        if app.state.store is None:
            overall_status = "unhealthy"

        return JSONResponse(
            status_code=200 if overall_status == "healthy" else 503,
            content={"status": overall_status, "checks": checks},
        )

    @app.api_route(INGEST_PATH, methods=ALL_METHODS)
    async def ingest_health(request: Request, handler: IngestHandler = Depends(get_handler)):
        """
        Endpoint que recibe el export del atajo (heart + steps + date).
        Acepta cualquier metodo para que un metodo distinto de POST responda 400.
        """
        body = None
        if request.method == "POST":
            try:
                body = await request.json()
            except ValueError:
                logger.warning("Body no es JSON valido")
        result = await handler.handle(request.method, request.headers, body)
        return JSONResponse(status_code=result.status_code, content=result.content)

    return app


def get_handler(request: Request) -> IngestHandler:
    """Obtiene el handler con la configuracion y el store del estado de la app."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(500, "Store no inicializado")
    return IngestHandler(request.app.state.settings, store)


app = create_app()
