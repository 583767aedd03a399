"""Main FastAPI application."""
from fastapi import FastAPI
from contextlib import asynccontextmanager

from dining.core.config import settings
from dining.core.logging import setup_logging
from dining.db.database import init_db
from dining.api import health, orders, tables


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await init_db()
    yield


app = FastAPI(
    title=f"{settings.restaurant_name} Dining Service",
    description="Table ordering for restaurant dining rooms",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(tables.router, tags=["tables"])
app.include_router(orders.router, tags=["table orders"])


def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    uvicorn.run("dining.main:app", host=settings.host, port=settings.port)
