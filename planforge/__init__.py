"""
PlanForge
Expand a project idea into epics, tasks and stories with an LLM, then push them to Jira.
"""

__version__ = "1.0.0"
