from fastapi import APIRouter

from shortener.api.v1.short_urls import router as short_urls_router

router = APIRouter()
router.include_router(short_urls_router)
