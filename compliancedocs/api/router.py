"""API router aggregation: one prefix and tag per resource."""

from fastapi import APIRouter

from compliancedocs.api.endpoints import auth, categories, documents, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
