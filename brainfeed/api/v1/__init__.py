"""API v1 routes."""

from fastapi import APIRouter

from brainfeed.api.v1 import analytics, articles, auth, catalog, chat, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(articles.router, prefix="/articles", tags=["articles"])
router.include_router(catalog.router)
router.include_router(chat.router, prefix="/chat", tags=["chat"])
router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
