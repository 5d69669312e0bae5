"""
Health Routes
Health check endpoints
"""
from fastapi import APIRouter, Depends
from datetime import datetime

from planforge import __version__
from ..dependencies import Services, get_services

router = APIRouter()


@router.get("/", tags=["Health"])
async def root():
    """Basic health check endpoint"""
    return {
        "message": "PlanForge API",
        "status": "healthy",
        "version": __version__,
        "docs_url": "/docs",
        "redoc_url": "/redoc"
    }


@router.get("/health", tags=["Health"])
async def health_check(services: Services = Depends(get_services)):
    """Report which upstream services are configured"""
    problems = services.config.validate()
    llm_config = services.config.get_llm_config()
    jira_config = services.config.get_jira_config()

    health_status = {
        "status": "healthy" if not problems else "degraded",
        "timestamp": datetime.now().isoformat(),
        "services": {
            "local_models": "configured" if llm_config.get('local_api_base') else "not configured",
            "openai": "configured" if llm_config.get('openai_api_key') else "not configured",
            "anthropic": "configured" if llm_config.get('anthropic_api_key') else "not configured",
            "jira": "configured" if jira_config.get('server_url') and jira_config.get('api_token') else "not configured"
        }
    }
    if problems:
        health_status["problems"] = problems
    return health_status
