"""
Error Taxonomy
Every failure a request can hit is one of these. The route layer turns them
into the uniform ``{error, details}`` body.
"""
from typing import Any, List, Optional


class PlanForgeError(Exception):
    """Base class for all request-scoped failures"""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else message

    def __str__(self) -> str:
        return self.message


class ValidationError(PlanForgeError):
    """A required request field is missing or has an unsupported value"""


class ProviderRequestFailed(PlanForgeError):
    """An LLM provider call failed or returned an unexpected envelope"""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        details = message
        if status_code is not None:
            details = f"{message} (status {status_code})"
        if body:
            details = f"{details}: {body}"
        super().__init__(message, details)
        self.status_code = status_code
        self.body = body


class MalformedModelOutput(PlanForgeError):
    """The model reply could not be parsed as JSON"""

    def __init__(self, raw_text: str, reason: Optional[str] = None):
        message = "Invalid JSON response from the model"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.raw_text = raw_text


class NoJiraProjectAvailable(PlanForgeError):
    """No project key was given and the Jira instance has no projects"""

    def __init__(self):
        super().__init__("No Jira projects found")


class JiraMetadataUnavailable(PlanForgeError):
    """Jira project or issue-type metadata could not be fetched"""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        details = f"{message}: {body}" if body else message
        super().__init__(message, details)
        self.status_code = status_code
        self.body = body


class UnknownIssueType(PlanForgeError):
    """The requested issue type is not configured on the Jira project"""

    def __init__(self, issue_type: str, available: List[str]):
        super().__init__(
            f"No valid issue type found for {issue_type}. "
            f"Available types are: {', '.join(available)}"
        )
        self.issue_type = issue_type
        self.available = available


class JiraIssueRejected(PlanForgeError):
    """Jira refused the issue-creation payload"""

    def __init__(self, status_code: Optional[int], body: Any):
        message = f"Jira rejected the issue ({status_code})"
        super().__init__(message, f"{message}: {body}")
        self.status_code = status_code
        self.body = body
