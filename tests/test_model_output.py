import pytest

from planforge.errors import MalformedModelOutput
from planforge.model_output import parse_model_json, strip_code_fence


class TestStripCodeFence:

    def test_strips_json_fence(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_strips_bare_fence(self):
        assert strip_code_fence('```\n[1, 2]\n```') == '[1, 2]'

    def test_leaves_plain_text_alone(self):
        assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'


class TestParseModelJson:

    def test_strict_json(self):
        assert parse_model_json('{"epics": [], "tasks": [], "stories": []}') == {
            'epics': [], 'tasks': [], 'stories': []
        }

    def test_fenced_json_is_accepted(self):
        """Models often wrap JSON in a markdown fence despite instructions"""
        text = '```json\n{"id": "E1", "summary": "Auth"}\n```'
        assert parse_model_json(text) == {'id': 'E1', 'summary': 'Auth'}

    def test_uppercase_fence_language(self):
        assert parse_model_json('```JSON\n{"ok": true}\n```') == {'ok': True}

    def test_garbage_raises_with_raw_text(self):
        with pytest.raises(MalformedModelOutput) as exc_info:
            parse_model_json('Sure! Here are your epics: ...')

        assert exc_info.value.raw_text == 'Sure! Here are your epics: ...'
        assert exc_info.value.message.startswith('Invalid JSON response from the model')

    def test_prose_around_json_is_not_repaired(self):
        with pytest.raises(MalformedModelOutput):
            parse_model_json('Here you go:\n{"a": 1}\nEnjoy!')

    def test_none_raises(self):
        with pytest.raises(MalformedModelOutput):
            parse_model_json(None)
