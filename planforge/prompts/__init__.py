"""
Centralized Prompt Templates
All LLM prompts are defined here for better maintainability and consistency.

This module aggregates prompts from category-specific modules behind a
single Prompts class.
"""
from .generation import GenerationPrompts
from .design import DesignPrompts
from .system import SystemPrompts


class Prompts:
    """Centralized prompt templates organized by category"""

    # ==========================================
    # GENERATION PROMPTS
    # ==========================================

    @staticmethod
    def get_requirements_prompt_template() -> str:
        """Get the idea-to-backlog template"""
        return GenerationPrompts.get_requirements_prompt_template()

    @staticmethod
    def get_story_code_prompt_template() -> str:
        """Get the single-story code template"""
        return GenerationPrompts.get_story_code_prompt_template()

    @staticmethod
    def get_full_code_prompt_template() -> str:
        """Get the whole-project code template"""
        return GenerationPrompts.get_full_code_prompt_template()

    @staticmethod
    def get_rewrite_prompt_template() -> str:
        """Get the feedback rewrite template"""
        return GenerationPrompts.get_rewrite_prompt_template()

    # ==========================================
    # DESIGN PROMPTS
    # ==========================================

    @staticmethod
    def get_architecture_prompt_template() -> str:
        """Get the PlantUML architecture template"""
        return DesignPrompts.get_architecture_prompt_template()

    @staticmethod
    def get_pseudocode_prompt_template() -> str:
        """Get the pseudocode template"""
        return DesignPrompts.get_pseudocode_prompt_template()

    # ==========================================
    # SYSTEM PROMPTS
    # ==========================================

    @staticmethod
    def get_requirements_system_prompt() -> str:
        return SystemPrompts.get_requirements_system_prompt()

    @staticmethod
    def get_rewrite_system_prompt() -> str:
        return SystemPrompts.get_rewrite_system_prompt()
