import pytest

from planforge.config import (
    Config,
    DEFAULT_ARCHITECTURE_MODEL,
    DEFAULT_OPENAI_MODELS,
    DEFAULT_PSEUDOCODE_MODEL,
)

CONFIG_YAML = """
server:
  port: ${TEST_PLANFORGE_PORT:5001}
  environment: ${TEST_PLANFORGE_ENV:production}

llm:
  local_api_base: ${TEST_OLLAMA_API_BASE}
  openai_api_key: ${TEST_OPENAI_API_KEY}
  openai_models: ${TEST_OPENAI_MODELS:gpt-4o-mini,gpt-4o}
  temperature: ${TEST_LLM_TEMPERATURE}

jira:
  server_url: https://test.atlassian.net
  email: dev@example.com
  api_token: ${TEST_JIRA_API_TOKEN}
"""


class TestConfigLoading:

    @pytest.fixture
    def config_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML)
        return str(path)

    def test_substitutes_environment_variables(self, config_file, monkeypatch):
        monkeypatch.setenv('TEST_OLLAMA_API_BASE', 'http://localhost:11434/api/')
        monkeypatch.setenv('TEST_JIRA_API_TOKEN', 'secret')

        config = Config(config_file)

        assert config.get_llm_config()['local_api_base'] == 'http://localhost:11434/api'
        assert config.get_jira_config()['api_token'] == 'secret'

    def test_uses_defaults_when_unset(self, config_file, monkeypatch):
        monkeypatch.delenv('TEST_PLANFORGE_ENV', raising=False)
        monkeypatch.delenv('TEST_OPENAI_MODELS', raising=False)

        config = Config(config_file)

        assert config.server['port'] == 5001
        assert config.is_development is False
        assert config.get_openai_models() == ['gpt-4o-mini', 'gpt-4o']

    def test_unset_temperature_falls_back(self, config_file, monkeypatch):
        monkeypatch.delenv('TEST_LLM_TEMPERATURE', raising=False)
        assert Config(config_file).get_llm_config()['temperature'] == 0.7

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config(str(tmp_path / "missing.yaml"))


class TestConfigAccessors:

    def test_defaults_for_empty_config(self):
        config = Config.from_dict({})

        assert config.get_openai_models() == DEFAULT_OPENAI_MODELS
        assert config.get_architecture_model() == DEFAULT_ARCHITECTURE_MODEL
        assert config.get_pseudocode_model() == DEFAULT_PSEUDOCODE_MODEL
        assert config.get_plantuml_server_url() == 'http://www.plantuml.com/plantuml'
        assert config.is_development is True

        llm_config = config.get_llm_config()
        assert llm_config['anthropic_max_tokens'] == 4000
        assert llm_config['timeout_seconds'] == 120
        assert llm_config['openai_api_key'] is None

    def test_model_overrides(self):
        config = Config.from_dict({'llm': {'architecture_model': 'claude-3-opus-20240229', 'pseudocode_model': 'gpt-4o'}})

        assert config.get_architecture_model() == 'claude-3-opus-20240229'
        assert config.get_pseudocode_model() == 'gpt-4o'

    def test_openai_models_list(self):
        config = Config.from_dict({'llm': {'openai_models': ['gpt-4']}})
        assert config.get_openai_models() == ['gpt-4']

    def test_validate_reports_missing_settings(self):
        problems = Config.from_dict({'jira': {'server_url': 'https://test.atlassian.net'}}).validate()

        assert "Missing Jira configuration: email" in problems
        assert "Missing Jira configuration: api_token" in problems
        assert "Missing Jira configuration: server_url" not in problems
        assert "Missing LLM configuration: anthropic_api_key" in problems

    def test_validate_complete_config(self):
        config = Config.from_dict({
            'llm': {
                'local_api_base': 'http://localhost:11434/api',
                'openai_api_key': 'sk-test',
                'anthropic_api_key': 'sk-ant-test'
            },
            'jira': {
                'server_url': 'https://test.atlassian.net',
                'email': 'dev@example.com',
                'api_token': 'token'
            }
        })
        assert config.validate() == []
