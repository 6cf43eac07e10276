from fastapi import APIRouter
from apis.v1.route_run import router as run_router

api_router = APIRouter()
api_router.include_router(run_router, tags=["run"])
