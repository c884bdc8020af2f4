"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from journal.config import settings
from journal.database import init_engine, dispose_engine, create_db_and_tables
from journal.utils.logging import setup_logging
from journal.api import auth, trades, dashboard, export, uploads, system


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging()
    init_engine()
    create_db_and_tables()

    yield

    dispose_engine()


app = FastAPI(
    title="Trading Journal",
    description="Personal trading journal with performance analytics and CSV export",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(auth.router)
app.include_router(trades.router)
app.include_router(dashboard.router)
app.include_router(export.router)
app.include_router(uploads.router)
app.include_router(system.router)
