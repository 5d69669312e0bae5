"""
Generation Routes
Endpoints for model listing, backlog generation, code and design generation
"""
from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from typing import Optional
import logging

from planforge.generator import PlanGenerator
from planforge.llm_client import LLMClient
from planforge.models import Requirements, dump_items
from ..models.generation import (
    ModelsResponse,
    GenerateCodeRequest,
    CodeResponse,
    DesignRequest,
    ArchitectureResponse,
    PseudocodeResponse,
    FullCodeRequest,
    RewriteItemRequest
)
from ..dependencies import get_generator, get_llm_client
from ..utils import error_response

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.get("/models",
         tags=["Generation"],
         response_model=ModelsResponse,
         summary="List available models",
         description="Models pulled on the local model server followed by the supported OpenAI models")
async def list_models(llm_client: LLMClient = Depends(get_llm_client)):
    try:
        models = await run_in_threadpool(llm_client.list_models)
        return {"models": models}
    except Exception as e:
        logger.error(f"Error fetching models: {e}")
        return error_response('Failed to fetch models', e)


@router.get("/generate-requirements",
         tags=["Generation"],
         responses={200: {"model": Requirements}},
         summary="Generate epics, tasks and stories",
         description="Expand a project idea into a backlog. The model output is returned as produced.")
async def generate_requirements(
    idea: Optional[str] = Query(None, description="Project idea"),
    model: Optional[str] = Query(None, description="Model id"),
    generator: PlanGenerator = Depends(get_generator)
):
    """Generate a backlog from a project idea"""
    try:
        requirements = await run_in_threadpool(generator.generate_requirements, idea, model)
        return requirements
    except Exception as e:
        logger.error(f"Error generating requirements: {e}")
        return error_response('Failed to generate requirements', e)


@router.post("/generate-code",
          tags=["Generation"],
          response_model=CodeResponse,
          summary="Generate code for a user story")
async def generate_code(
    request: GenerateCodeRequest,
    generator: PlanGenerator = Depends(get_generator)
):
    try:
        story = request.story.dict(exclude_unset=True) if request.story else None
        code = await run_in_threadpool(generator.generate_story_code, story, request.model)
        return {"code": code}
    except Exception as e:
        logger.error(f"Error generating code: {e}")
        return error_response('Failed to generate code', e)


@router.post("/generate-architecture",
          tags=["Design"],
          response_model=ArchitectureResponse,
          summary="Generate a PlantUML architecture diagram",
          description="The diagram source is sanitized: fences removed, @startuml/@enduml guaranteed, ASCII only.")
async def generate_architecture(
    request: DesignRequest,
    generator: PlanGenerator = Depends(get_generator)
):
    try:
        architecture = await run_in_threadpool(
            generator.generate_architecture,
            dump_items(request.epics),
            dump_items(request.tasks),
            dump_items(request.stories),
            request.model
        )
        return {"architecture": architecture}
    except Exception as e:
        logger.error(f"Error generating architecture: {e}")
        return error_response('Failed to generate valid architecture diagram', e)


@router.post("/generate-pseudocode",
          tags=["Design"],
          response_model=PseudocodeResponse,
          summary="Generate pseudocode for the backlog")
async def generate_pseudocode(
    request: DesignRequest,
    generator: PlanGenerator = Depends(get_generator)
):
    try:
        pseudocode = await run_in_threadpool(
            generator.generate_pseudocode,
            dump_items(request.epics),
            dump_items(request.tasks),
            dump_items(request.stories),
            request.model
        )
        return {"pseudocode": pseudocode}
    except Exception as e:
        logger.error(f"Error generating pseudocode: {e}")
        return error_response('Failed to generate pseudocode', e)


@router.post("/generate-full-code",
          tags=["Generation"],
          response_model=CodeResponse,
          summary="Generate code for the whole project",
          description="Accepts requirements/userStories, or epics/stories under their backlog names.")
async def generate_full_code(
    request: FullCodeRequest,
    generator: PlanGenerator = Depends(get_generator)
):
    try:
        requirements = request.requirements if request.requirements is not None else request.epics
        user_stories = request.userStories if request.userStories is not None else request.stories
        code = await run_in_threadpool(
            generator.generate_full_code,
            dump_items(requirements or []),
            dump_items(user_stories or []),
            request.model
        )
        return {"code": code}
    except Exception as e:
        logger.error(f"Error generating full code: {e}")
        return error_response('Failed to generate full code', e)


@router.post("/rewrite-item",
          tags=["Generation"],
          summary="Rewrite an epic, task or story from feedback",
          description="Returns the rewritten item object as produced by the model.")
async def rewrite_item(
    request: RewriteItemRequest,
    generator: PlanGenerator = Depends(get_generator)
):
    try:
        return await run_in_threadpool(
            generator.rewrite_item,
            request.itemType,
            request.item,
            request.feedback,
            request.model
        )
    except Exception as e:
        logger.error(f"Error rewriting item: {e}")
        return error_response('Failed to rewrite item', e)
