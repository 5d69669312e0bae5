from planforge.models import Epic, Requirements, Story, Task, dangling_epic_references, dump_items


class TestBacklogModels:

    def test_non_string_values_are_kept(self):
        task = Task(id=3, summary='Create table', acceptanceCriteria=['Table exists', 'Has index'], epicId=1)
        assert task.dict(exclude_unset=True) == {
            'id': 3,
            'summary': 'Create table',
            'acceptanceCriteria': ['Table exists', 'Has index'],
            'epicId': 1
        }

    def test_unknown_keys_are_kept(self):
        epic = Epic(id='E1', summary='Auth', priority='high')
        assert epic.dict(exclude_unset=True) == {'id': 'E1', 'summary': 'Auth', 'priority': 'high'}

    def test_dump_items_only_sent_keys(self):
        items = [Task(id='T1', summary='Create table', epicId='E1'), Story(id='S1')]
        assert dump_items(items) == [
            {'id': 'T1', 'summary': 'Create table', 'epicId': 'E1'},
            {'id': 'S1'}
        ]

    def test_requirements_defaults(self):
        requirements = Requirements()
        assert requirements.epics == []
        assert requirements.tasks == []
        assert requirements.stories == []


class TestDanglingEpicReferences:

    def test_all_linked(self):
        requirements = {
            'epics': [{'id': 'E1'}],
            'tasks': [{'id': 'T1', 'epicId': 'E1'}],
            'stories': [{'id': 'S1', 'epicId': 'E1'}]
        }
        assert dangling_epic_references(requirements) == []

    def test_reports_unknown_epics(self):
        requirements = {
            'epics': [{'id': 'E1'}],
            'tasks': [{'id': 'T1', 'epicId': 'E2'}],
            'stories': [{'id': 'S1', 'epicId': 'E3'}, {'id': 'S2'}]
        }
        assert dangling_epic_references(requirements) == ['T1', 'S1']

    def test_tolerates_malformed_entries(self):
        assert dangling_epic_references({'epics': None, 'tasks': ['oops'], 'stories': None}) == []
