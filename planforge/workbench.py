"""
Workbench
HTTP client for the PlanForge API and the in-memory controller that drives
the planning workflow: generate a backlog, refine items, generate code and
design documents, and push items to Jira.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from .plantuml import DEFAULT_SERVER_URL, image_url

logger = logging.getLogger(__name__)

ITEM_LISTS = {
    'epic': 'epics',
    'task': 'tasks',
    'story': 'stories',
    'storie': 'stories',
}


class WorkbenchError(Exception):
    """An API call made by the workbench failed"""

    def __init__(self, message: str, details: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.status_code = status_code


class PlanForgeAPIClient:
    """Simple client for the PlanForge API"""

    def __init__(self, base_url: str = "http://localhost:5001", session: Optional[requests.Session] = None,
                 timeout: float = 300):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def _call(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise WorkbenchError(f"Could not reach PlanForge API: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.ok:
            if isinstance(body, dict) and body.get('error'):
                raise WorkbenchError(body['error'], details=body.get('details'), status_code=response.status_code)
            raise WorkbenchError(f"Request failed ({response.status_code})", details=response.text,
                                 status_code=response.status_code)
        return body

    def health_check(self) -> dict:
        return self._call("GET", "/health")

    def get_models(self) -> List[str]:
        return self._call("GET", "/api/models").get('models', [])

    def get_jira_projects(self) -> List[dict]:
        return self._call("GET", "/api/jira-projects")

    def generate_requirements(self, idea: str, model: str) -> dict:
        return self._call("GET", "/api/generate-requirements", params={"idea": idea, "model": model})

    def generate_code(self, story: dict, model: str) -> str:
        return self._call("POST", "/api/generate-code", json={"story": story, "model": model})['code']

    def generate_architecture(self, epics: list, tasks: list, stories: list) -> str:
        payload = {"epics": epics, "tasks": tasks, "stories": stories}
        return self._call("POST", "/api/generate-architecture", json=payload)['architecture']

    def generate_pseudocode(self, epics: list, tasks: list, stories: list) -> str:
        payload = {"epics": epics, "tasks": tasks, "stories": stories}
        return self._call("POST", "/api/generate-pseudocode", json=payload)['pseudocode']

    def generate_full_code(self, requirements: list, user_stories: list, model: str) -> str:
        payload = {"requirements": requirements, "userStories": user_stories, "model": model}
        return self._call("POST", "/api/generate-full-code", json=payload)['code']

    def rewrite_item(self, item_type: str, item: dict, feedback: str, model: str) -> dict:
        payload = {"itemType": item_type, "item": item, "feedback": feedback, "model": model}
        return self._call("POST", "/api/rewrite-item", json=payload)

    def submit_to_jira(self, item: dict, item_type: str, project_key: Optional[str] = None) -> dict:
        payload = {"item": item, "itemType": item_type}
        if project_key:
            payload["projectKey"] = project_key
        return self._call("POST", "/api/submit-to-jira", json=payload)


class Workbench:
    """
    Client-side state of one planning session.

    Every action performs a single API call. Failures are recorded in
    ``last_error`` and re-raised as WorkbenchError; state touched by a
    failed action is left as it was, except that a requirements
    generation clears the backlog before calling the API.
    """

    def __init__(self, api_client: PlanForgeAPIClient, model: Optional[str] = None,
                 plantuml_server_url: str = DEFAULT_SERVER_URL):
        self.api_client = api_client
        self.model = model
        self.plantuml_server_url = plantuml_server_url

        self.models: List[str] = []
        self.projects: List[Dict[str, Any]] = []
        self.epics: List[Dict[str, Any]] = []
        self.tasks: List[Dict[str, Any]] = []
        self.stories: List[Dict[str, Any]] = []
        self.generated_code: Dict[str, str] = {}
        self.architecture: Optional[str] = None
        self.architecture_image_url: Optional[str] = None
        self.pseudocode: Optional[str] = None
        self.full_code: Optional[str] = None
        self.last_error: Optional[str] = None
        self.last_message: Optional[str] = None

    def _run(self, action: str, call, *args, **kwargs):
        self.last_error = None
        try:
            return call(*args, **kwargs)
        except WorkbenchError as e:
            logger.error(f"{action} failed: {e.message} {e.details or ''}".rstrip())
            self.last_error = e.message
            raise

    def load_models(self) -> List[str]:
        self.models = self._run("Loading models", self.api_client.get_models)
        if self.model is None and self.models:
            self.model = self.models[0]
        return self.models

    def load_projects(self) -> List[Dict[str, Any]]:
        self.projects = self._run("Loading Jira projects", self.api_client.get_jira_projects)
        return self.projects

    def generate_requirements(self, idea: str) -> None:
        """Replace the backlog with one generated from ``idea``; a blank idea does nothing"""
        if not idea or not idea.strip():
            return

        self.epics, self.tasks, self.stories = [], [], []
        requirements = self._run("Generating requirements", self.api_client.generate_requirements, idea, self.model)
        self.epics = requirements.get('epics') or []
        self.tasks = requirements.get('tasks') or []
        self.stories = requirements.get('stories') or []
        logger.info(f"Loaded {len(self.epics)} epics, {len(self.tasks)} tasks, {len(self.stories)} stories")

    def rewrite_item(self, item_type: str, item: Dict[str, Any], feedback: str) -> Dict[str, Any]:
        """Rewrite an item and replace the entry with the same id in its list"""
        list_name = ITEM_LISTS.get((item_type or '').lower())
        if list_name is None:
            raise WorkbenchError(f"Invalid item type: {item_type}")

        rewritten = self._run("Rewriting item", self.api_client.rewrite_item, item_type, item, feedback, self.model)
        items = getattr(self, list_name)
        setattr(self, list_name, [rewritten if existing.get('id') == item.get('id') else existing for existing in items])
        return rewritten

    def generate_code(self, story: Dict[str, Any]) -> str:
        code = self._run("Generating code", self.api_client.generate_code, story, self.model)
        self.generated_code[story.get('id')] = code
        return code

    def generate_architecture(self) -> str:
        """Generate the architecture diagram and the PlantUML image URL that renders it"""
        architecture = self._run(
            "Generating architecture", self.api_client.generate_architecture,
            self.epics, self.tasks, self.stories
        )
        self.architecture = architecture
        self.architecture_image_url = image_url(architecture, self.plantuml_server_url)
        return architecture

    def generate_pseudocode(self) -> str:
        self.pseudocode = self._run(
            "Generating pseudocode", self.api_client.generate_pseudocode,
            self.epics, self.tasks, self.stories
        )
        return self.pseudocode

    def generate_full_code(self) -> str:
        self.full_code = self._run(
            "Generating full code", self.api_client.generate_full_code,
            self.epics, self.stories, self.model
        )
        return self.full_code

    def submit_to_jira(self, item: Dict[str, Any], item_type: str, project_key: Optional[str] = None) -> Dict[str, Any]:
        result = self._run("Submitting to Jira", self.api_client.submit_to_jira, item, item_type, project_key)
        self.last_message = result.get('message')
        return result
