"""
Tests for mapping generated items onto Jira issue payloads
"""
import logging

import pytest
from unittest.mock import Mock

from planforge.errors import NoJiraProjectAvailable, UnknownIssueType, ValidationError
from planforge.jira_client import JiraClient
from planforge.jira_issue_mapper import (
    JiraIssueMapper,
    as_text,
    build_adf_document,
    build_issue_payload,
    find_field_id,
    normalize_issue_type,
)

ISSUE_TYPES = [
    {'id': '10000', 'name': 'Epic'},
    {'id': '10001', 'name': 'Task'},
    {'id': '10002', 'name': 'Story'},
]

FIELDS_BY_TYPE = {
    '10000': {'summary': {'name': 'Summary'}},
    '10001': {
        'summary': {'name': 'Summary'},
        'customfield_10014': {'name': 'Epic Link'},
        'customfield_10020': {'name': 'Acceptance Criteria'},
    },
    # Stories on this project have no Epic Link field
    '10002': {'summary': {'name': 'Summary'}},
}


@pytest.fixture
def jira_client():
    client = Mock(spec=JiraClient)
    client.get_create_issue_types.return_value = ISSUE_TYPES
    client.get_create_fields.side_effect = lambda project_key, issue_type_id: FIELDS_BY_TYPE[issue_type_id]
    client.create_issue.return_value = {'id': '10100', 'key': 'TODO-1'}
    client.list_projects.return_value = [{'id': '1', 'key': 'TODO', 'name': 'Todo App'}]
    return client


@pytest.fixture
def mapper(jira_client):
    return JiraIssueMapper(jira_client)


class TestHelpers:

    @pytest.mark.parametrize('raw, expected', [
        ('Story', 'story'),
        ('storie', 'story'),
        (' TASK ', 'task'),
        ('Epic', 'epic'),
        ('Bug', 'bug'),
    ])
    def test_normalize_issue_type(self, raw, expected):
        assert normalize_issue_type(raw) == expected

    def test_adf_document(self):
        assert build_adf_document('Hello') == {
            'type': 'doc',
            'version': 1,
            'content': [{'type': 'paragraph', 'content': [{'type': 'text', 'text': 'Hello'}]}]
        }

    def test_adf_document_empty_text(self):
        assert build_adf_document('')['content'][0]['content'] == []

    @pytest.mark.parametrize('value, expected', [
        (None, ''),
        ('Table exists', 'Table exists'),
        (['Table exists', 'Has index'], 'Table exists\nHas index'),
        (42, '42'),
    ])
    def test_as_text(self, value, expected):
        assert as_text(value) == expected

    def test_adf_document_from_list(self):
        document = build_adf_document(['Given a user', 'Then a todo exists'])
        assert document['content'][0]['content'] == [{'type': 'text', 'text': 'Given a user\nThen a todo exists'}]

    def test_find_field_id(self):
        assert find_field_id(FIELDS_BY_TYPE['10001'], 'Epic Link') == 'customfield_10014'
        assert find_field_id(FIELDS_BY_TYPE['10002'], 'Epic Link') is None

    def test_epic_payload_ignores_epic_link(self):
        info = {'id': '10000', 'fields': {'customfield_10014': {'name': 'Epic Link'}}}
        payload = build_issue_payload('TODO', 'epic', info, 'Auth', 'Login', epic_key='E1')

        assert 'customfield_10014' not in payload['fields']
        assert payload['fields']['issuetype'] == {'id': '10000'}
        assert payload['fields']['project'] == {'key': 'TODO'}


class TestSubmitItem:

    def test_submit_task(self, mapper, jira_client):
        item = {
            'id': 'T1',
            'summary': 'Create todo table',
            'description': 'Schema for todos',
            'acceptanceCriteria': 'Table exists',
            'epicId': 'E1'
        }

        result = mapper.submit_item(item, 'task', 'TODO')

        assert result == {'id': '10100', 'key': 'TODO-1'}
        fields = jira_client.create_issue.call_args.args[0]['fields']
        assert fields['summary'] == 'Create todo table'
        assert fields['issuetype'] == {'id': '10001'}
        assert fields['description'] == build_adf_document('Schema for todos')
        assert fields['customfield_10014'] == 'E1'
        assert fields['customfield_10020'] == build_adf_document('Table exists')

    def test_missing_epic_link_is_not_fatal(self, mapper, jira_client, caplog):
        item = {'id': 'S1', 'summary': 'Add a todo', 'description': 'As a user...', 'epicId': 'E1'}

        with caplog.at_level(logging.WARNING):
            mapper.submit_item(item, 'story', 'TODO')

        fields = jira_client.create_issue.call_args.args[0]['fields']
        assert set(fields) == {'project', 'summary', 'issuetype', 'description'}
        assert 'Epic Link field not found' in caplog.text

    def test_storie_is_story(self, mapper, jira_client):
        item = {'id': 'S1', 'summary': 'Add a todo', 'description': 'As a user...'}

        mapper.submit_item(item, 'story', 'TODO')
        story_payload = jira_client.create_issue.call_args.args[0]
        mapper.submit_item(item, 'storie', 'TODO')
        storie_payload = jira_client.create_issue.call_args.args[0]

        assert storie_payload == story_payload
        assert storie_payload['fields']['issuetype'] == {'id': '10002'}

    def test_submit_epic(self, mapper, jira_client):
        mapper.submit_item({'id': 'E1', 'summary': 'Task management', 'epicId': 'E9'}, 'epic', 'TODO')

        fields = jira_client.create_issue.call_args.args[0]['fields']
        assert fields['issuetype'] == {'id': '10000'}
        assert fields['description'] == build_adf_document('')

    def test_defaults_to_first_project(self, mapper, jira_client):
        mapper.submit_item({'summary': 'Task management'}, 'epic')

        jira_client.get_create_issue_types.assert_called_once_with('TODO')
        assert jira_client.create_issue.call_args.args[0]['fields']['project'] == {'key': 'TODO'}

    def test_no_projects(self, mapper, jira_client):
        jira_client.list_projects.return_value = []

        with pytest.raises(NoJiraProjectAvailable):
            mapper.submit_item({'summary': 'Task management'}, 'epic')
        jira_client.create_issue.assert_not_called()

    def test_invalid_item_type(self, mapper, jira_client):
        with pytest.raises(ValidationError) as exc_info:
            mapper.submit_item({'summary': 'Broken login'}, 'bug', 'TODO')

        assert exc_info.value.message == 'Invalid item type: bug'
        jira_client.get_create_issue_types.assert_not_called()

    def test_missing_summary(self, mapper):
        with pytest.raises(ValidationError):
            mapper.submit_item({'description': 'No summary'}, 'task', 'TODO')

    def test_issue_type_missing_on_project(self, mapper, jira_client):
        jira_client.get_create_issue_types.return_value = [{'id': '10000', 'name': 'Epic'}]

        with pytest.raises(UnknownIssueType) as exc_info:
            mapper.submit_item({'summary': 'Create table'}, 'task', 'TODO')

        assert exc_info.value.available == ['epic']
        assert 'Available types are: epic' in exc_info.value.message

    def test_metadata_fetched_per_issue(self, mapper, jira_client):
        mapper.submit_item({'summary': 'One'}, 'epic', 'TODO')
        mapper.submit_item({'summary': 'Two'}, 'epic', 'TODO')

        assert jira_client.get_create_issue_types.call_count == 2
