"""
JIRA Operations Routes
Endpoints for listing Jira projects and submitting generated items
"""
from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from typing import List
import logging

from planforge.errors import ValidationError
from planforge.jira_client import JiraClient
from planforge.jira_issue_mapper import JiraIssueMapper
from ..models.jira_operations import JiraProject, SubmitToJiraRequest, SubmitToJiraResponse
from ..dependencies import get_jira_client, get_issue_mapper
from ..utils import error_response

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.get("/jira-projects",
         tags=["JIRA Operations"],
         response_model=List[JiraProject],
         summary="List Jira projects")
async def list_jira_projects(jira_client: JiraClient = Depends(get_jira_client)):
    try:
        return await run_in_threadpool(jira_client.list_projects)
    except Exception as e:
        logger.error(f"Error fetching Jira projects: {e}")
        return error_response('Failed to fetch Jira projects', e)


@router.post("/submit-to-jira",
          tags=["JIRA Operations"],
          response_model=SubmitToJiraResponse,
          summary="Create a Jira issue from an epic, task or story",
          description="Falls back to the first project of the instance when projectKey is omitted. "
                      "Custom fields (Epic Link, Acceptance Criteria) are filled only when the project defines them.")
async def submit_to_jira(
    request: SubmitToJiraRequest,
    issue_mapper: JiraIssueMapper = Depends(get_issue_mapper)
):
    """Submit one generated item to Jira"""
    try:
        if not request.item:
            return error_response('Failed to submit to Jira', ValidationError("Missing required field: item"))
        if not request.itemType:
            return error_response('Failed to submit to Jira', ValidationError("Missing required field: itemType"))

        created = await run_in_threadpool(
            issue_mapper.submit_item,
            request.item,
            request.itemType,
            request.projectKey
        )
        return {"message": 'Successfully created issue in Jira', "createdIssue": created}
    except Exception as e:
        logger.error(f"Error submitting to Jira: {e}")
        return error_response('Failed to submit to Jira', e)
