from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.api import api_router
from app.core.config import settings
from app.core.logger import logger
from app.core.redis import redis_client
from app.db.session import engine
from app.middleware.log_middleware import LogMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{settings.PROJECT_NAME} starting, clinic clock {settings.CLINIC_TIMEZONE}")
    yield
    # Token store connections and the DB pool outlive requests; release them here
    await redis_client.close()
    await engine.dispose()
    logger.info(f"{settings.PROJECT_NAME} stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LogMiddleware)


@app.get("/")
async def root():
    return {"service": settings.PROJECT_NAME, "clinic_timezone": settings.CLINIC_TIMEZONE}


app.include_router(api_router, prefix=settings.API_V1_STR)
