"""
Models Package
Export all API models for easy imports
"""
# Generation models
from .generation import (
    ModelsResponse,
    GenerateCodeRequest,
    CodeResponse,
    DesignRequest,
    ArchitectureResponse,
    PseudocodeResponse,
    FullCodeRequest,
    RewriteItemRequest
)

# JIRA operations models
from .jira_operations import (
    JiraProject,
    SubmitToJiraRequest,
    SubmitToJiraResponse
)

__all__ = [
    "ModelsResponse",
    "GenerateCodeRequest",
    "CodeResponse",
    "DesignRequest",
    "ArchitectureResponse",
    "PseudocodeResponse",
    "FullCodeRequest",
    "RewriteItemRequest",
    "JiraProject",
    "SubmitToJiraRequest",
    "SubmitToJiraResponse",
]
