from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from isle.infrastructure.database import engine, initialize_database
from isle.infrastructure.notifications import notification_dispatcher
from isle.interfaces.api.errors import register_exception_handlers
from isle.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup; drain deliveries and release connections on shutdown."""

    initialize_database()
    yield
    notification_dispatcher.shutdown()
    engine.dispose()


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    app = FastAPI(title="Isle API", lifespan=lifespan)

    # Web client served from localhost:4200 during development.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:4200"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()
