"""FastAPI application factory."""

from fastapi import FastAPI

from mealer.api.ai import router as ai_router
from mealer.app_logging import configure_logging
from mealer.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)

    app = FastAPI(title="Mealer")
    app.state.container = container

    app.include_router(ai_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
