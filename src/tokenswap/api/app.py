"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tokenswap.config import Settings, get_settings
from tokenswap.ledger.database import close_db, get_session_factory, init_db
from tokenswap.ledger.gateway import SqlLedgerGateway
from tokenswap.services.deployment import deploy_swap
from tokenswap.swap.engine import SwapEngine


async def attach_swap_engine(app: FastAPI, settings: Optional[Settings] = None) -> SwapEngine:
    """Deploy the swap engine and expose it (and its gateway) on app.state."""
    settings = settings or get_settings()
    gateway = SqlLedgerGateway(get_session_factory(), settings.operator_account)
    engine = await deploy_swap(gateway, settings)

    app.state.ledger_gateway = gateway
    app.state.swap_engine = engine
    return engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await init_db()
    await attach_swap_engine(app)
    yield
    # Shutdown
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="tokenswap API",
        description="Fixed-rate swap between two ledger tokens",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from tokenswap.api.routers import admin, swap, tokens
    from tokenswap.api.routes import health

    app.include_router(health.router, tags=["Health"])
    app.include_router(swap.router, prefix="/api/v1", tags=["Swap"])
    app.include_router(tokens.router, prefix="/api/v1", tags=["Tokens"])
    app.include_router(admin.router, tags=["Admin"])

    return app


# Default app instance
app = create_app()
