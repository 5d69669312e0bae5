from typing import Dict, Any, Optional, List
from pydantic import BaseModel


class BacklogItem(BaseModel):
    """
    Common shape of generated backlog items; unknown keys are kept as-is.

    Values are whatever the model produced (an integer id, a list of
    acceptance criteria), so nothing is coerced to a string here.
    """
    id: Optional[Any] = None
    summary: Optional[Any] = None
    description: Optional[Any] = None

    class Config:
        extra = "allow"


class Epic(BacklogItem):
    """Top-level feature area, id of the form E<n>"""


class Task(BacklogItem):
    """Implementation task belonging to an epic"""
    acceptanceCriteria: Optional[Any] = None
    epicId: Optional[Any] = None


class Story(BacklogItem):
    """User story belonging to an epic ("As a ... I want ... so that ...")"""
    epicId: Optional[Any] = None


class Requirements(BaseModel):
    """Epics, tasks and stories produced by one generation call"""
    epics: List[Epic] = []
    tasks: List[Task] = []
    stories: List[Story] = []

    class Config:
        extra = "allow"


def dump_items(items: List[BaseModel]) -> List[Dict[str, Any]]:
    """Serialize items back to the keys the client actually sent"""
    return [item.dict(exclude_unset=True) for item in items]


def dangling_epic_references(requirements: Dict[str, Any]) -> List[str]:
    """
    Ids of tasks/stories whose epicId does not match an epic of the same response.

    Works on the raw model output so that malformed entries never raise.
    """
    epics = requirements.get('epics') or []
    epic_ids = {epic.get('id') for epic in epics if isinstance(epic, dict)}

    dangling = []
    for key in ('tasks', 'stories'):
        for item in requirements.get(key) or []:
            if not isinstance(item, dict):
                continue
            epic_id = item.get('epicId')
            if epic_id is not None and epic_id not in epic_ids:
                dangling.append(str(item.get('id')))
    return dangling
