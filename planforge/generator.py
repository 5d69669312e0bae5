"""
Plan Generator
Builds the prompt for each generation capability, sends it to the provider
the model id routes to, and post-processes the reply.
"""
import json
import logging
from typing import Any, Dict, List, Optional

from .errors import MalformedModelOutput, ValidationError
from .llm_client import LLMClient
from .model_output import parse_model_json
from .models import dangling_epic_references
from .plantuml import sanitize
from .prompts import Prompts

logger = logging.getLogger(__name__)


def _require(value: Any, field: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Missing required field: {field}")


class PlanGenerator:
    """Generates backlog artifacts, code and design documents from an LLM"""

    def __init__(self, llm_client: LLMClient, architecture_model: str, pseudocode_model: str):
        self.llm_client = llm_client
        self.architecture_model = architecture_model
        self.pseudocode_model = pseudocode_model

    def generate_requirements(self, idea: str, model: str) -> Dict[str, Any]:
        """
        Expand a project idea into ``{epics, tasks, stories}``.

        The parsed model output is returned exactly as produced. Tasks or
        stories pointing at epics missing from the response are logged, not
        rejected.
        """
        _require(idea, 'idea')
        _require(model, 'model')

        prompt = Prompts.get_requirements_prompt_template().format(idea=idea)
        logger.info(f"Generating requirements with model {model}")

        content = self.llm_client.generate(
            prompt, model,
            system_prompt=Prompts.get_requirements_system_prompt(),
            json_mode=True
        )
        requirements = parse_model_json(content)
        if not isinstance(requirements, dict):
            raise MalformedModelOutput(content, "expected a JSON object with epics, tasks and stories")

        dangling = dangling_epic_references(requirements)
        if dangling:
            logger.warning(f"Generated items reference unknown epics: {', '.join(dangling)}")

        logger.info(
            f"Generated {len(requirements.get('epics') or [])} epics, "
            f"{len(requirements.get('tasks') or [])} tasks, "
            f"{len(requirements.get('stories') or [])} stories"
        )
        return requirements

    def generate_story_code(self, story: Dict[str, Any], model: str) -> str:
        """Generate a code snippet implementing one user story"""
        _require(story, 'story')
        _require(model, 'model')

        prompt = Prompts.get_story_code_prompt_template().format(
            summary=story.get('summary', ''),
            description=story.get('description', '')
        )
        logger.info(f"Generating code for story {story.get('id')} with model {model}")
        return self.llm_client.generate(prompt, model)

    def generate_architecture(
        self,
        epics: List[Dict[str, Any]],
        tasks: List[Dict[str, Any]],
        stories: List[Dict[str, Any]],
        model: Optional[str] = None
    ) -> str:
        """Generate a sanitized PlantUML architecture diagram for the backlog"""
        model = model or self.architecture_model
        prompt = Prompts.get_architecture_prompt_template().format(
            epics=json.dumps(epics),
            tasks=json.dumps(tasks),
            stories=json.dumps(stories)
        )
        logger.info(f"Generating architecture diagram with model {model}")

        architecture = sanitize(self.llm_client.generate(prompt, model))
        logger.debug(f"Sanitized PlantUML architecture string:\n{architecture}")
        return architecture

    def generate_pseudocode(
        self,
        epics: List[Dict[str, Any]],
        tasks: List[Dict[str, Any]],
        stories: List[Dict[str, Any]],
        model: Optional[str] = None
    ) -> str:
        model = model or self.pseudocode_model
        prompt = Prompts.get_pseudocode_prompt_template().format(
            epics=json.dumps(epics),
            tasks=json.dumps(tasks),
            stories=json.dumps(stories)
        )
        logger.info(f"Generating pseudocode with model {model}")
        return self.llm_client.generate(prompt, model)

    def generate_full_code(self, requirements: List[Dict[str, Any]], user_stories: List[Dict[str, Any]], model: str) -> str:
        """Generate a code skeleton for the whole project"""
        _require(model, 'model')

        prompt = Prompts.get_full_code_prompt_template().format(
            requirements=json.dumps(requirements),
            user_stories=json.dumps(user_stories)
        )
        logger.info(f"Generating full project code with model {model}")
        return self.llm_client.generate(prompt, model)

    def rewrite_item(self, item_type: str, item: Dict[str, Any], feedback: str, model: str) -> Dict[str, Any]:
        """Rewrite one epic, task or story according to reviewer feedback"""
        _require(item_type, 'itemType')
        _require(item, 'item')
        _require(feedback, 'feedback')
        _require(model, 'model')

        logger.info(f"Rewriting {item_type} {item.get('id')} with feedback: {feedback}")
        prompt = Prompts.get_rewrite_prompt_template().format(
            item_type=item_type,
            feedback=feedback,
            item=json.dumps(item)
        )

        content = self.llm_client.generate(
            prompt, model,
            system_prompt=Prompts.get_rewrite_system_prompt(),
            json_mode=True
        )
        rewritten = parse_model_json(content)
        if not isinstance(rewritten, dict):
            raise MalformedModelOutput(content, f"expected the rewritten {item_type} as a JSON object")

        logger.debug(f"Rewritten item: {rewritten}")
        return rewritten
