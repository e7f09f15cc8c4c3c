import uvicorn
from health_api.config import Settings
from health_api.logger import setup_logging

settings = Settings.from_env()
setup_logging(settings)

if __name__ == "__main__":
    uvicorn.run(
        "health_api.app:app",
        host=settings.host,
        port=settings.port,
        reload=True
    )
