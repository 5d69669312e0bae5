"""
Generation Prompts
Prompts for requirements, code and rewrite generation.
"""


class GenerationPrompts:
    """Prompts for content generation"""

    @staticmethod
    def get_requirements_prompt_template() -> str:
        """Get the template that expands a project idea into epics, tasks and stories"""
        return """Given the following project idea: "{idea}", generate a comprehensive and structured JSON output containing epics, tasks, and stories for a software development project. The output should follow this exact structure:

{{
  "epics": [
    {{
      "id": "E1",
      "summary": "Epic Summary",
      "description": "Detailed description of the epic"
    }}
  ],
  "tasks": [
    {{
      "id": "T1",
      "summary": "Task Summary",
      "acceptanceCriteria": "Detailed acceptance criteria for the task",
      "description": "Detailed description of the task",
      "epicId": "E1"
    }}
  ],
  "stories": [
    {{
      "id": "S1",
      "summary": "Story Summary",
      "description": "As a [user type], I want [goal] so that [benefit]",
      "epicId": "E1"
    }}
  ]
}}

Guidelines:
1. Generate 3-5 epics, 2-4 tasks per epic, and 2-3 stories per epic.
2. Ensure all IDs are unique and follow the format shown (E1, T1, S1, etc.).
3. Make sure all relationships between epics, tasks, and stories are correctly cross-referenced using epicId.
4. Provide detailed and specific descriptions for each item.
5. For stories, follow the "As a [user type], I want [goal] so that [benefit]" format in the description.
6. Include specific and testable acceptance criteria for each task.
7. Ensure the entire output is valid JSON that can be parsed without errors.
8. Do not include any additional text, markdown formatting, or explanations outside the JSON structure.

Strictly provide only the JSON output without any additional text or formatting."""

    @staticmethod
    def get_story_code_prompt_template() -> str:
        """Get the template for generating a code snippet for one user story"""
        return """Generate code for the following user story:
{summary}
{description}

Please provide a code snippet that implements this user story."""

    @staticmethod
    def get_full_code_prompt_template() -> str:
        """Get the template for generating a whole-project code skeleton"""
        return """Generate code for the entire project based on the following requirements and user stories:
Epics: {requirements}
User Stories: {user_stories}

Please provide a comprehensive code structure for this project, including main components, functions, and basic implementations."""

    @staticmethod
    def get_rewrite_prompt_template() -> str:
        """Get the template for rewriting an item from reviewer feedback"""
        return """Rewrite the following {item_type} based on this feedback: "{feedback}".
Original {item_type}: {item}
Provide the rewritten {item_type} in the same JSON structure, maintaining all existing fields. Make sure to incorporate the feedback and improve the {item_type} accordingly."""
