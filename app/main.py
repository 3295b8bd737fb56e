from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import settings
from app.database import connect_db, disconnect_db
from app.gyms.router import router as gyms_router
from app.logs import configure_logging
from app.zones.router import router as zones_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await connect_db()
    yield
    await disconnect_db()


app = FastAPI(
    title="Loomies World Admin",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.DOCS_ENABLED else None,
    redoc_url="/redoc" if settings.DOCS_ENABLED else None,
    openapi_url="/openapi.json" if settings.DOCS_ENABLED else None,
)

app.include_router(gyms_router)
app.include_router(zones_router)


@app.get("/health")
async def health_check():
    return {"status": "ok"}
