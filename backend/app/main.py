from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.v1.router import api_router
from app.core.config import settings
from app.core.logging import setup_logging
from app.services.employee_service import employee_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    await employee_service.initialize(settings)
    logger.info("Organization Management API started (version=%s)", settings.APP_VERSION)
    yield
    await employee_service.close()
    logger.info("Organization Management API stopped")


app = FastAPI(
    title="Organization Management API",
    description="Employee records with JSON/XML round-trip diagnostics",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)
app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Organization Management API"}
