import os
import re
import yaml
import logging
from typing import Dict, Any, List, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODELS = ['gpt-4o-mini', 'gpt-4o', 'gpt-4']
DEFAULT_ARCHITECTURE_MODEL = 'claude-3-5-sonnet-20240620'
DEFAULT_PSEUDOCODE_MODEL = 'claude-3-haiku-20240307'


class Config:
    """Configuration manager for PlanForge"""

    def __init__(self, config_path: str = "config.yaml", data: Optional[Dict[str, Any]] = None):
        self.config_path = config_path
        if data is not None:
            self._config = data
        else:
            load_dotenv()
            self._config = self._load_config()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Build a configuration from an already-parsed mapping (tests, embedding)"""
        return cls(config_path="<memory>", data=data)

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file with environment variable substitution"""
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r') as file:
            config_content = file.read()

        config_content = self._substitute_env_vars(config_content)

        return yaml.safe_load(config_content) or {}

    def _substitute_env_vars(self, content: str) -> str:
        """Replace ${VAR_NAME} and ${VAR_NAME:default} with environment variables"""
        def replace_var(match):
            var_expr = match.group(1)
            if ':' in var_expr:
                var_name, default_value = var_expr.split(':', 1)
                return os.getenv(var_name, default_value)
            else:
                return os.getenv(var_expr, '')

        return re.sub(r'\$\{([^}]+)\}', replace_var, content)

    @property
    def server(self) -> Dict[str, Any]:
        return self._config.get('server') or {}

    @property
    def llm(self) -> Dict[str, Any]:
        return self._config.get('llm') or {}

    @property
    def jira(self) -> Dict[str, Any]:
        return self._config.get('jira') or {}

    @property
    def plantuml(self) -> Dict[str, Any]:
        return self._config.get('plantuml') or {}

    @property
    def is_development(self) -> bool:
        return str(self.server.get('environment', 'development')).lower() == 'development'

    def get_openai_models(self) -> List[str]:
        """Fixed list of OpenAI model ids offered next to the local models"""
        models = self.llm.get('openai_models')
        if isinstance(models, str):
            models = [m.strip() for m in models.split(',') if m.strip()]
        return list(models) if models else list(DEFAULT_OPENAI_MODELS)

    def get_llm_config(self) -> Dict[str, Any]:
        """Provider settings for the LLM client"""
        # YAML may hand back '' when an env var is unset
        temperature = self.llm.get('temperature')
        temperature = 0.7 if temperature in (None, '') else float(temperature)

        return {
            'local_api_base': (self.llm.get('local_api_base') or '').rstrip('/'),
            'openai_api_key': self.llm.get('openai_api_key') or None,
            'openai_api_base': self.llm.get('openai_api_base') or None,
            'openai_models': self.get_openai_models(),
            'anthropic_api_key': self.llm.get('anthropic_api_key') or None,
            'anthropic_max_tokens': int(self.llm.get('anthropic_max_tokens') or 4000),
            'temperature': temperature,
            'timeout_seconds': float(self.llm.get('timeout_seconds') or 120),
        }

    def get_jira_config(self) -> Dict[str, Any]:
        """Connection settings for the Jira client"""
        return {
            'server_url': self.jira.get('server_url') or '',
            'email': self.jira.get('email') or '',
            'api_token': self.jira.get('api_token') or '',
            'timeout_seconds': float(self.jira.get('timeout_seconds') or 30),
        }

    def get_architecture_model(self) -> str:
        return self.llm.get('architecture_model') or DEFAULT_ARCHITECTURE_MODEL

    def get_pseudocode_model(self) -> str:
        return self.llm.get('pseudocode_model') or DEFAULT_PSEUDOCODE_MODEL

    def get_plantuml_server_url(self) -> str:
        return self.plantuml.get('server_url') or 'http://www.plantuml.com/plantuml'

    def validate(self) -> List[str]:
        """
        Check that the settings every capability needs are present.

        Missing settings are reported, not fatal: the requests that need them
        fail on their own with a descriptive error.
        """
        errors = []

        jira_required = ['server_url', 'email', 'api_token']
        for field in jira_required:
            if not self.jira.get(field):
                errors.append(f"Missing Jira configuration: {field}")

        if not self.llm.get('local_api_base'):
            errors.append("Missing LLM configuration: local_api_base")
        if not self.llm.get('openai_api_key'):
            errors.append("Missing LLM configuration: openai_api_key")
        if not self.llm.get('anthropic_api_key'):
            errors.append("Missing LLM configuration: anthropic_api_key")

        for error in errors:
            logger.warning(f"Configuration Error: {error}")

        return errors
