"""
Generation Models
Request and response models for the generation endpoints
"""
from pydantic import BaseModel, Field
from typing import Optional, List

from planforge.models import Epic, Task, Story


class ModelsResponse(BaseModel):
    """Models the client can pick from"""
    models: List[str] = Field(..., description="Local model names followed by the fixed OpenAI model ids")


class GenerateCodeRequest(BaseModel):
    """Request to generate a code snippet for one user story"""
    story: Optional[Story] = Field(None, description="The user story to implement")
    model: Optional[str] = Field(None, description="Model id; gpt-* routes to OpenAI, claude-* to Anthropic, anything else to the local server")

    class Config:
        json_schema_extra = {
            "example": {
                "story": {
                    "id": "S1",
                    "summary": "Add a todo",
                    "description": "As a user, I want to add a todo so that I remember tasks",
                    "epicId": "E1"
                },
                "model": "gpt-4o-mini"
            }
        }


class CodeResponse(BaseModel):
    code: str


class DesignRequest(BaseModel):
    """Backlog sent for architecture or pseudocode generation"""
    epics: List[Epic] = []
    tasks: List[Task] = []
    stories: List[Story] = []
    model: Optional[str] = Field(None, description="Override the configured Anthropic model")


class ArchitectureResponse(BaseModel):
    architecture: str = Field(..., description="Sanitized PlantUML source")


class PseudocodeResponse(BaseModel):
    pseudocode: str


class FullCodeRequest(BaseModel):
    """Request to generate code for the whole project"""
    requirements: Optional[List[Epic]] = Field(None, description="Epics of the project")
    userStories: Optional[List[Story]] = Field(None, description="User stories of the project")
    epics: Optional[List[Epic]] = Field(None, description="Accepted in place of requirements")
    tasks: Optional[List[Task]] = Field(None, description="Ignored; accepted for client compatibility")
    stories: Optional[List[Story]] = Field(None, description="Accepted in place of userStories")
    model: Optional[str] = None


class RewriteItemRequest(BaseModel):
    """Request to rewrite one epic, task or story from feedback"""
    itemType: Optional[str] = Field(None, description="epic, task or story")
    item: Optional[dict] = Field(None, description="The item as currently held by the client")
    feedback: Optional[str] = Field(None, description="Reviewer feedback to incorporate")
    model: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "itemType": "epic",
                "item": {"id": "E1", "summary": "Task management", "description": "Create and track todos"},
                "feedback": "Mention offline support",
                "model": "llama3"
            }
        }
