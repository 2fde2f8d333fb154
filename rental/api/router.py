from fastapi import APIRouter

from rental.api.routers import auth, charts, contracts, dashboard, notifications, settings

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(contracts.router)
api_router.include_router(charts.router)
api_router.include_router(dashboard.router)
api_router.include_router(settings.router)
api_router.include_router(notifications.router)
