from fastapi import APIRouter
from app.api.v1 import auth, doctors, patients, bookings

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(doctors.router, prefix="/doctors", tags=["doctors"])
api_router.include_router(patients.router, prefix="/patients", tags=["patients"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
