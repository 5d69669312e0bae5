"""
Routes Package
Aggregate all route routers
"""
from fastapi import APIRouter

from .health import router as health_router
from .generation import router as generation_router
from .jira_operations import router as jira_operations_router

# Create main router
api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(generation_router)
api_router.include_router(jira_operations_router)
