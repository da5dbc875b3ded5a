import uvicorn

from app.core.config import settings

# Set up logging first
from app.config.logging_config import setup_logging
setup_logging()

from app.main import create_app

app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.server_reload
    )
