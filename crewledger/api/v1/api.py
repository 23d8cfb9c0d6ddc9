from fastapi import APIRouter
from crewledger.api.v1.endpoints import apa, bookings, reconciliation, scores, seasons

api_router = APIRouter()

api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(apa.router, tags=["apa"])
api_router.include_router(reconciliation.router, tags=["reconciliation"])
api_router.include_router(scores.router, tags=["scores"])
api_router.include_router(seasons.router, prefix="/seasons", tags=["seasons"])
