"""
System Prompts
System prompts for the different generation capabilities.
"""


class SystemPrompts:
    """System prompts for LLM providers"""

    @staticmethod
    def get_requirements_system_prompt() -> str:
        """Get system prompt for structured requirements generation"""
        return "You are a helpful assistant that generates project requirements in JSON format. You strictly only generate JSON with no leading or trailing text."

    @staticmethod
    def get_rewrite_system_prompt() -> str:
        """Get system prompt for rewriting a single backlog item"""
        return "You are an experienced product owner who rewrites backlog items based on reviewer feedback. You respond with a single JSON object and nothing else."
