from fastapi import APIRouter
from . import root_routes, download_routes, convert_routes

router = APIRouter()

router.include_router(root_routes.router, tags=["root"])
router.include_router(download_routes.router, tags=["download"])
router.include_router(convert_routes.router, tags=["convert"])

__all__ = ["router"]
