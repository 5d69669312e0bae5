"""
JIRA Operations Models
Request and response models for the Jira endpoints
"""
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


class JiraProject(BaseModel):
    id: Optional[str] = None
    key: Optional[str] = None
    name: Optional[str] = None


class SubmitToJiraRequest(BaseModel):
    """Request to create a Jira issue from a generated item"""
    projectKey: Optional[str] = Field(
        None,
        description="Jira project key; the first project of the instance is used when omitted"
    )
    item: Optional[Dict[str, Any]] = Field(None, description="The epic, task or story to submit")
    itemType: Optional[str] = Field(None, description="epic, task or story")

    class Config:
        json_schema_extra = {
            "example": {
                "projectKey": "TODO",
                "item": {
                    "id": "T1",
                    "summary": "Create todo table",
                    "description": "Schema for todos",
                    "acceptanceCriteria": "Table exists with id, title, done",
                    "epicId": "E1"
                },
                "itemType": "task"
            }
        }


class SubmitToJiraResponse(BaseModel):
    message: str
    createdIssue: Dict[str, Any]
