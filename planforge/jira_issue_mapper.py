"""
Jira Issue Mapper
Discovers a project's issue types and custom field ids, then builds and
submits issue-creation payloads for generated epics, tasks and stories.

Field metadata is fetched fresh for every issue created. Nothing is cached
between calls.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from .errors import NoJiraProjectAvailable, UnknownIssueType, ValidationError
from .jira_client import JiraClient

logger = logging.getLogger(__name__)

EPIC_LINK_FIELD = 'Epic Link'
ACCEPTANCE_CRITERIA_FIELD = 'Acceptance Criteria'

# Item types as sent by clients, mapped to Jira issue type names
ITEM_ISSUE_TYPES = {
    'epic': 'Epic',
    'task': 'Task',
    'story': 'Story',
}


def normalize_issue_type(name: str) -> str:
    """Lower-case an issue type name; 'storie' is treated as 'story'"""
    normalized = (name or '').strip().lower()
    if normalized == 'storie':
        return 'story'
    return normalized


def as_text(value: Any) -> str:
    """Render a generated field as plain text; lists become one line per entry"""
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return '\n'.join(as_text(entry) for entry in value)
    return str(value)


def build_adf_document(value: Any) -> Dict[str, Any]:
    """Wrap plain text in the one-paragraph Atlassian Document Format document Jira requires"""
    text = as_text(value)
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}] if text else []
            }
        ]
    }


def find_field_id(fields: Dict[str, Dict[str, Any]], display_name: str) -> Optional[str]:
    """Id of the field whose display name matches exactly, or None"""
    for field_id, schema in fields.items():
        if isinstance(schema, dict) and schema.get('name') == display_name:
            return field_id
    return None


def build_issue_payload(
    project_key: str,
    issue_type_name: str,
    issue_type_info: Dict[str, Any],
    summary: str,
    description: str,
    epic_key: Optional[str] = None,
    acceptance_criteria: Any = None
) -> Dict[str, Any]:
    """
    Compose the issue-creation payload.

    Args:
        project_key: Jira project key
        issue_type_name: normalized issue type name (e.g. "task")
        issue_type_info: ``{"id": ..., "fields": {field_id: schema}}``
        summary: issue summary
        description: plain-text description
        epic_key: epic reference; ignored for epics and when the project
            has no "Epic Link" field
        acceptance_criteria: criteria as text or a list of entries; ignored when the project
            has no "Acceptance Criteria" field

    Returns:
        Payload for POST /rest/api/3/issue
    """
    fields = issue_type_info.get('fields') or {}

    issue_data = {
        "fields": {
            "project": {"key": project_key},
            "summary": summary,
            "issuetype": {"id": issue_type_info['id']},
            "description": build_adf_document(description)
        }
    }

    if epic_key and issue_type_name != 'epic':
        epic_link_field = find_field_id(fields, EPIC_LINK_FIELD)
        if epic_link_field:
            issue_data["fields"][epic_link_field] = epic_key
        else:
            logger.warning(f"Epic Link field not found for issue type '{issue_type_name}', creating without epic link")

    if acceptance_criteria:
        criteria_field = find_field_id(fields, ACCEPTANCE_CRITERIA_FIELD)
        if criteria_field:
            issue_data["fields"][criteria_field] = build_adf_document(acceptance_criteria)
        else:
            logger.warning(f"Acceptance Criteria field not found for issue type '{issue_type_name}', creating without it")

    return issue_data


class JiraIssueMapper:
    """Maps generated items onto a Jira project's issue types and fields"""

    def __init__(self, jira_client: JiraClient):
        self.jira_client = jira_client

    def resolve_project_key(self, project_key: Optional[str] = None) -> str:
        """Use the given key, or fall back to the first project on the instance"""
        if project_key:
            return project_key

        projects = self.jira_client.list_projects()
        if not projects:
            raise NoJiraProjectAvailable()

        default_key = projects[0]['key']
        logger.info(f"No project key provided. Using default: {default_key}")
        return default_key

    def get_project_fields(self, project_key: str) -> Dict[str, Dict[str, Any]]:
        """Map lower-cased issue type name to ``{id, fields}`` for a project"""
        logger.info(f"Fetching project fields for project key: {project_key}")
        issue_types = self.jira_client.get_create_issue_types(project_key)

        project_fields = {}
        for issue_type in issue_types:
            project_fields[issue_type['name'].lower()] = {
                'id': issue_type['id'],
                'fields': self.jira_client.get_create_fields(project_key, issue_type['id'])
            }

        logger.debug(f"Processed project fields: {list(project_fields.keys())}")
        return project_fields

    def resolve_issue_type(self, project_fields: Dict[str, Dict[str, Any]], issue_type: str) -> Tuple[str, Dict[str, Any]]:
        name = normalize_issue_type(issue_type)
        info = project_fields.get(name)
        if not info:
            raise UnknownIssueType(issue_type, list(project_fields.keys()))
        return name, info

    def create_issue(
        self,
        project_key: str,
        issue_type: str,
        summary: str,
        description: str,
        epic_key: Optional[str] = None,
        acceptance_criteria: Any = None
    ) -> Dict[str, Any]:
        """Create one issue, resolving field ids against the project's current metadata"""
        logger.info(f"Creating Jira issue: {issue_type} for project {project_key}")
        project_fields = self.get_project_fields(project_key)
        name, info = self.resolve_issue_type(project_fields, issue_type)

        issue_data = build_issue_payload(
            project_key, name, info, summary, description,
            epic_key=epic_key, acceptance_criteria=acceptance_criteria
        )
        logger.debug(f"Sending Jira request with data: {issue_data}")

        return self.jira_client.create_issue(issue_data)

    def submit_item(self, item: Dict[str, Any], item_type: str, project_key: Optional[str] = None) -> Dict[str, Any]:
        """
        Push a generated epic, task or story into Jira.

        Tasks carry their epic reference and acceptance criteria, stories
        their epic reference, epics neither.
        """
        normalized_type = normalize_issue_type(item_type)
        if normalized_type not in ITEM_ISSUE_TYPES:
            raise ValidationError(f"Invalid item type: {item_type}")

        summary = as_text(item.get('summary')).strip()
        if not summary:
            raise ValidationError("Missing required field: item.summary")
        description = as_text(item.get('description'))

        resolved_key = self.resolve_project_key(project_key)
        logger.info(f"Submitting to Jira: {normalized_type} for project {resolved_key}")

        issue_type = ITEM_ISSUE_TYPES[normalized_type]
        if normalized_type == 'epic':
            return self.create_issue(resolved_key, issue_type, summary, description)
        elif normalized_type == 'task':
            return self.create_issue(
                resolved_key, issue_type, summary, description,
                epic_key=as_text(item.get('epicId')) or None,
                acceptance_criteria=item.get('acceptanceCriteria')
            )
        return self.create_issue(
            resolved_key, issue_type, summary, description,
            epic_key=as_text(item.get('epicId')) or None
        )
