import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hrfleet import __version__
from hrfleet.config import settings
from hrfleet.database import engine, init_db
from hrfleet.routers.employees import router as employees_router
from hrfleet.routers.vehicles import router as vehicles_router
from hrfleet.utils.exceptions import register_exception_handlers
from hrfleet.utils.logger import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    try:
        await init_db()
    except Exception:
        logger.critical("Could not connect to the database, shutting down", exc_info=True)
        raise SystemExit(1)
    logger.info("Server running on http://localhost:%s", settings.port)
    yield
    await engine.dispose()


app = FastAPI(
    title="HR Fleet API",
    description="Employees, loyalty points and company vehicles",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)

app.include_router(employees_router)
app.include_router(vehicles_router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "hrfleet", "version": __version__}
