from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, List, Dict, Any
import logging

import requests

from .errors import ProviderRequestFailed

logger = logging.getLogger(__name__)


class ProviderKind(str, Enum):
    """LLM backends a model id can route to"""
    LOCAL = "local"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"

    @classmethod
    def from_model_id(cls, model_id: str) -> "ProviderKind":
        """Resolve the provider from the model id naming convention"""
        normalized = (model_id or '').strip().lower()
        if normalized.startswith('gpt-'):
            return cls.OPENAI
        if normalized.startswith('claude-'):
            return cls.ANTHROPIC
        return cls.LOCAL


class LLMProvider(ABC):
    """Abstract base class for LLM providers bound to a single model"""

    kind: ProviderKind

    def __init__(self, model: str, temperature: float = 0.7):
        self.model = model
        self.temperature = temperature

    @abstractmethod
    def generate(self, prompt: str, system_prompt: Optional[str] = None, json_mode: bool = False) -> str:
        """Send the prompt and return the assistant's plain-text reply"""
        pass


class LocalModelProvider(LLMProvider):
    """Local model-serving API (Ollama-style /chat and /tags endpoints)"""

    kind = ProviderKind.LOCAL

    def __init__(self, api_base: str, model: str, session: Optional[requests.Session] = None,
                 temperature: float = 0.7, timeout: float = 120):
        super().__init__(model, temperature)
        self.api_base = (api_base or '').rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def build_payload(self, prompt: str, system_prompt: Optional[str] = None, json_mode: bool = False) -> Dict[str, Any]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False
        }
        if json_mode:
            payload["format"] = "json"
        return payload

    def generate(self, prompt: str, system_prompt: Optional[str] = None, json_mode: bool = False) -> str:
        if not self.api_base:
            raise ProviderRequestFailed("Local model server URL is not configured")

        url = f"{self.api_base}/chat"
        payload = self.build_payload(prompt, system_prompt, json_mode)
        logger.info(f"Calling local model server: model={self.model}, json_mode={json_mode}")
        logger.debug(f"Local model prompt:\n{prompt}")

        data = _request_json(self.session, "POST", url, "Local model server", self.timeout, json=payload)

        content = (data.get('message') or {}).get('content') if isinstance(data, dict) else None
        if content is None:
            raise ProviderRequestFailed("Local model server response is missing message.content", body=data)

        logger.info(f"Local model response length: {len(content)} characters")
        return content

    def list_models(self) -> List[str]:
        """Names of the models the local server has pulled"""
        if not self.api_base:
            raise ProviderRequestFailed("Local model server URL is not configured")

        data = _request_json(self.session, "GET", f"{self.api_base}/tags", "Local model server", self.timeout)
        models = data.get('models') if isinstance(data, dict) else None
        if not isinstance(models, list):
            raise ProviderRequestFailed("Local model server response is missing models", body=data)

        return [model['name'] for model in models if isinstance(model, dict) and model.get('name')]


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions provider"""

    kind = ProviderKind.OPENAI

    def __init__(self, client, model: str, temperature: float = 0.7):
        super().__init__(model, temperature)
        self.client = client

    def generate(self, prompt: str, system_prompt: Optional[str] = None, json_mode: bool = False) -> str:
        import openai

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        logger.info(f"Calling OpenAI: model={self.model}")
        logger.debug(f"OpenAI prompt:\n{prompt}")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature
            )
        except openai.APIStatusError as e:
            logger.error(f"OpenAI API error: {e}")
            raise ProviderRequestFailed("OpenAI request failed", status_code=e.status_code, body=e.body) from e
        except openai.OpenAIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise ProviderRequestFailed(f"OpenAI request failed: {e}") from e

        choices = getattr(response, 'choices', None)
        if not choices:
            raise ProviderRequestFailed("OpenAI response contains no choices")

        result = choices[0].message.content
        if result is None:
            raise ProviderRequestFailed("OpenAI response is missing message content")

        logger.info(f"OpenAI response length: {len(result)} characters, finish_reason: {getattr(choices[0], 'finish_reason', None)}")
        return result


class ClaudeProvider(LLMProvider):
    """Anthropic Claude messages provider"""

    kind = ProviderKind.ANTHROPIC

    def __init__(self, client, model: str, temperature: float = 0.7, max_tokens: int = 4000):
        super().__init__(model, temperature)
        self.client = client
        self.max_tokens = max_tokens

    def generate(self, prompt: str, system_prompt: Optional[str] = None, json_mode: bool = False) -> str:
        import anthropic

        request = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": [{"role": "user", "content": prompt}]
        }
        if system_prompt:
            request["system"] = system_prompt

        logger.info(f"Calling Claude: model={self.model}, max_tokens={self.max_tokens}")
        logger.debug(f"Claude prompt:\n{prompt}")

        try:
            response = self.client.messages.create(**request)
        except anthropic.APIStatusError as e:
            logger.error(f"Claude API error: {e}")
            raise ProviderRequestFailed("Anthropic request failed", status_code=e.status_code, body=e.body) from e
        except anthropic.AnthropicError as e:
            logger.error(f"Claude API error: {e}")
            raise ProviderRequestFailed(f"Anthropic request failed: {e}") from e

        content = getattr(response, 'content', None)
        if not content or getattr(content[0], 'text', None) is None:
            raise ProviderRequestFailed("Anthropic response is missing content text")

        if getattr(response, 'stop_reason', None) == "max_tokens":
            logger.warning(f"Claude response was truncated due to max_tokens limit ({self.max_tokens})")

        result = content[0].text
        logger.info(f"Claude response length: {len(result)} characters")
        return result


def _request_json(session: requests.Session, method: str, url: str, service: str, timeout: float, **kwargs) -> Any:
    """Perform an HTTP call and return the decoded JSON body, mapping every failure to ProviderRequestFailed"""
    try:
        response = session.request(method, url, timeout=timeout, **kwargs)
    except requests.exceptions.RequestException as e:
        logger.error(f"{service} request to {url} failed: {e}")
        raise ProviderRequestFailed(f"{service} request failed: {e}") from e

    if not response.ok:
        logger.error(f"{service} returned {response.status_code}: {response.text}")
        raise ProviderRequestFailed(f"{service} returned an error", status_code=response.status_code, body=response.text)

    try:
        return response.json()
    except ValueError as e:
        raise ProviderRequestFailed(f"{service} returned a non-JSON body", status_code=response.status_code, body=response.text) from e


class LLMClient:
    """Factory and dispatcher for LLM providers"""

    def __init__(self, config: dict, session: Optional[requests.Session] = None,
                 openai_client=None, anthropic_client=None):
        self.config = config
        self.local_api_base = config.get('local_api_base') or ''
        self.openai_models = list(config.get('openai_models') or [])
        self.temperature = config.get('temperature', 0.7)
        self.timeout = config.get('timeout_seconds', 120)
        self.anthropic_max_tokens = config.get('anthropic_max_tokens', 4000)
        self.session = session or requests.Session()
        self._openai_client = openai_client
        self._anthropic_client = anthropic_client
        logger.info(f"LLMClient initialized: local_api_base={self.local_api_base or '(unset)'}, openai_models={self.openai_models}")

    def _get_openai_client(self):
        if self._openai_client is None:
            api_key = self.config.get('openai_api_key')
            if not api_key:
                raise ProviderRequestFailed("OpenAI API key is not configured")
            from openai import OpenAI
            kwargs = {"api_key": api_key, "timeout": self.timeout}
            if self.config.get('openai_api_base'):
                kwargs["base_url"] = self.config['openai_api_base']
            self._openai_client = OpenAI(**kwargs)
        return self._openai_client

    def _get_anthropic_client(self):
        if self._anthropic_client is None:
            api_key = self.config.get('anthropic_api_key')
            if not api_key:
                raise ProviderRequestFailed("Anthropic API key is not configured")
            import anthropic
            self._anthropic_client = anthropic.Anthropic(api_key=api_key, timeout=self.timeout)
        return self._anthropic_client

    def resolve_provider(self, model_id: str) -> ProviderKind:
        return ProviderKind.from_model_id(model_id)

    def get_provider(self, model_id: str) -> LLMProvider:
        """Create the provider that serves the given model id"""
        if not model_id:
            raise ProviderRequestFailed("No model specified")

        kind = self.resolve_provider(model_id)
        if kind == ProviderKind.OPENAI:
            return OpenAIProvider(self._get_openai_client(), model_id, self.temperature)
        elif kind == ProviderKind.ANTHROPIC:
            return ClaudeProvider(self._get_anthropic_client(), model_id, self.temperature, self.anthropic_max_tokens)
        return LocalModelProvider(self.local_api_base, model_id, self.session, self.temperature, self.timeout)

    def generate(self, prompt: str, model_id: str, system_prompt: Optional[str] = None, json_mode: bool = False) -> str:
        """Generate text with whichever provider the model id routes to"""
        provider = self.get_provider(model_id)
        logger.info(f"Dispatching prompt to {provider.kind.value} provider (model={model_id})")
        return provider.generate(prompt, system_prompt=system_prompt, json_mode=json_mode)

    def list_models(self) -> List[str]:
        """Local model names followed by the fixed OpenAI model ids"""
        local = LocalModelProvider(self.local_api_base, '', self.session, self.temperature, self.timeout)
        return local.list_models() + self.openai_models
