import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import create_tables, async_session
from app.dependencies import verify_api_key
from app.seed import seed_data
from app.routers.bookings import router as bookings_router
from app.routers.vehicles import router as vehicles_router
from app.utils.exceptions import register_exception_handlers

logging.basicConfig(level=settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    if settings.seed_demo_data:
        async with async_session() as session:
            await seed_data(session)
    yield


app = FastAPI(
    title="Fleet Booking API",
    description="Vehicle reservations, hand-off and return for a rental fleet",
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

register_exception_handlers(app)

_api_key_dep = [Depends(verify_api_key)]

app.include_router(vehicles_router, prefix="/api/v1", dependencies=_api_key_dep)
app.include_router(bookings_router, prefix="/api/v1", dependencies=_api_key_dep)


@app.get("/health")
async def health_check():
    return {"status": "success", "data": {"service": "fleet-booking-api", "version": "0.1.0"}, "message": None}
