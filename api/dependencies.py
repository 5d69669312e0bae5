"""
Shared Dependencies
Services built once from an explicit Config and handed to routes through FastAPI dependencies
"""
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Request
import logging

from planforge.config import Config
from planforge.generator import PlanGenerator
from planforge.jira_client import JiraClient
from planforge.jira_issue_mapper import JiraIssueMapper
from planforge.llm_client import LLMClient

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything a request handler may delegate to"""
    config: Config
    llm_client: LLMClient
    generator: PlanGenerator
    jira_client: JiraClient
    issue_mapper: JiraIssueMapper


def build_services(config: Optional[Config] = None) -> Services:
    """Initialize all clients and services from one configuration"""
    config = config or Config()

    problems = config.validate()
    if problems:
        logger.warning(f"Starting with {len(problems)} configuration problem(s); affected endpoints will fail per request")

    llm_client = LLMClient(config.get_llm_config())
    generator = PlanGenerator(
        llm_client=llm_client,
        architecture_model=config.get_architecture_model(),
        pseudocode_model=config.get_pseudocode_model()
    )

    jira_config = config.get_jira_config()
    jira_client = JiraClient(
        server_url=jira_config['server_url'],
        email=jira_config['email'],
        api_token=jira_config['api_token'],
        timeout=jira_config['timeout_seconds']
    )

    logger.info("All services initialized successfully")
    return Services(
        config=config,
        llm_client=llm_client,
        generator=generator,
        jira_client=jira_client,
        issue_mapper=JiraIssueMapper(jira_client)
    )


def get_services(request: Request) -> Services:
    """Get the services attached to the running application"""
    services = getattr(request.app.state, 'services', None)
    if services is None:
        raise RuntimeError("Services not initialized - ensure startup event completed")
    return services


def get_llm_client(services: Services = Depends(get_services)) -> LLMClient:
    return services.llm_client


def get_generator(services: Services = Depends(get_services)) -> PlanGenerator:
    return services.generator


def get_jira_client(services: Services = Depends(get_services)) -> JiraClient:
    return services.jira_client


def get_issue_mapper(services: Services = Depends(get_services)) -> JiraIssueMapper:
    return services.issue_mapper
