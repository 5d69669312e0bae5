import requests
from typing import Dict, List, Optional, Any
import logging
from urllib.parse import urljoin

from .errors import JiraMetadataUnavailable, JiraIssueRejected

logger = logging.getLogger(__name__)


class JiraClient:
    """Jira REST API client for project metadata and issue creation"""

    def __init__(self, server_url: str, email: str, api_token: str, timeout: float = 30,
                 session: Optional[requests.Session] = None):
        self.server_url = (server_url or '').rstrip('/')
        self.auth = (email, api_token)
        self.timeout = timeout

        logger.info(f"JiraClient initialized: server_url={self.server_url or '(unset)'}, email={email or '(unset)'}")
        self.session = session or requests.Session()
        self.session.auth = self.auth
        self.session.headers.update({
            'Accept': 'application/json',
            'Content-Type': 'application/json'
        })

    def _url(self, path: str) -> str:
        if not self.server_url:
            raise JiraMetadataUnavailable("Jira server URL is not configured")
        return urljoin(self.server_url, path)

    def _get_metadata(self, path: str, what: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET a metadata resource, mapping every failure to JiraMetadataUnavailable"""
        url = self._url(path)
        kwargs = {'timeout': self.timeout}
        if params:
            kwargs['params'] = params
        try:
            response = self.session.get(url, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to fetch {what}: {e}")
            raise JiraMetadataUnavailable(f"Failed to fetch {what}: {e}") from e

        if not response.ok:
            logger.error(f"Failed to fetch {what}: {response.status_code} - {response.text}")
            raise JiraMetadataUnavailable(
                f"Failed to fetch {what} ({response.status_code})",
                status_code=response.status_code,
                body=response.text
            )

        try:
            return response.json()
        except ValueError as e:
            raise JiraMetadataUnavailable(f"Jira returned a non-JSON body for {what}", body=response.text) from e

    def _get_all_pages(self, path: str, what: str, keys: List[str]) -> Any:
        """
        Collect every page of a createmeta listing.

        Pages are requested with ``startAt`` until ``total`` entries have been
        read (or Jira flags the last page). Unpaged answers, a bare list or an
        object keyed by field id, are returned as they come.
        """
        collected = []
        start_at = 0
        while True:
            data = self._get_metadata(path, what, params={'startAt': start_at})
            if not isinstance(data, dict):
                return data

            page = next((data[key] for key in keys if data.get(key) is not None), [])
            if isinstance(page, dict):
                return page

            collected.extend(page)
            total = data.get('total')
            if not page or data.get('isLast') or total is None or start_at + len(page) >= total:
                return collected

            start_at += len(page)
            logger.debug(f"Fetching next page of {what} (startAt={start_at}, total={total})")

    def list_projects(self) -> List[Dict[str, Any]]:
        """List the projects visible to the configured account"""
        data = self._get_metadata('/rest/api/3/project', 'Jira projects')
        # Paginated variants wrap the list in "values"
        if isinstance(data, dict):
            data = data.get('values', [])
        return [
            {'id': project.get('id'), 'key': project.get('key'), 'name': project.get('name')}
            for project in data or []
        ]

    def get_create_issue_types(self, project_key: str) -> List[Dict[str, Any]]:
        """Issue types available for issue creation in a project, across all pages"""
        issue_types = self._get_all_pages(
            f'/rest/api/3/issue/createmeta/{project_key}/issuetypes',
            f'issue types for project {project_key}',
            ['issueTypes', 'values']
        )
        logger.debug(f"Createmeta issue types for {project_key}: {issue_types}")
        return issue_types if isinstance(issue_types, list) else []

    def get_create_fields(self, project_key: str, issue_type_id: str) -> Dict[str, Dict[str, Any]]:
        """
        Field schemas for creating an issue of the given type.

        Returns a mapping of Jira field id (e.g. customfield_10014) to its
        schema. Jira answers either with pages of ``{fieldId, name, ...}``
        entries or with an object keyed by field id; both are normalized.
        """
        fields = self._get_all_pages(
            f'/rest/api/3/issue/createmeta/{project_key}/issuetypes/{issue_type_id}',
            f'fields for issue type {issue_type_id} in project {project_key}',
            ['fields', 'values']
        )

        if isinstance(fields, dict):
            return fields

        normalized = {}
        for field in fields or []:
            field_id = field.get('fieldId') or field.get('key') or field.get('id')
            if field_id:
                normalized[field_id] = field
        return normalized

    def create_issue(self, issue_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create an issue; Jira validation errors are raised verbatim as JiraIssueRejected"""
        url = self._url('/rest/api/3/issue')
        try:
            response = self.session.post(url, json=issue_data, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error creating Jira issue: {e}")
            raise JiraIssueRejected(None, str(e)) from e

        if response.status_code not in (200, 201):
            try:
                body = response.json()
            except ValueError:
                body = response.text
            logger.error(f"Failed to create Jira issue: {response.status_code} - {body}")
            raise JiraIssueRejected(response.status_code, body)

        result = response.json()
        logger.info(f"Created Jira issue: {result.get('key')}")
        return result
