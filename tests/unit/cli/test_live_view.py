"""
Unit Tests for client-side live views
"""
from cli.live_view import LiveCollection, PortalViews


def _frame(event_type, data):
    return {'type': event_type, 'data': data, 'timestamp': '2026-01-01T00:00:00'}


class TestLiveCollection:

    def test_add_appends(self):
        collection = LiveCollection('sections', items=[{'id': 'a'}])
        assert collection.add({'id': 'b'})
        assert collection.ids() == ['a', 'b']

    def test_newest_first_prepends(self):
        collection = LiveCollection('news', items=[{'id': 'old'}], newest_first=True)
        collection.add({'id': 'new'})
        assert collection.ids() == ['new', 'old']

    def test_remove_unknown_is_noop(self):
        collection = LiveCollection('sections', items=[{'id': 'a'}])
        assert not collection.remove('zzz')
        assert collection.ids() == ['a']

    def test_rejects_non_objects(self):
        collection = LiveCollection('sections')
        assert not collection.add('just-an-id')
        assert collection.items == []


class TestPortalViews:

    def test_section_events(self):
        views = PortalViews()
        views['sections'].reset([{'id': 's-1'}])

        assert views.apply(_frame('section-added', {'id': 's-2'}))
        assert views.apply(_frame('section-deleted', 's-1'))
        assert views['sections'].ids() == ['s-2']

    def test_news_prepended(self):
        views = PortalViews()
        views['news'].reset([{'id': 'n-1'}])

        views.apply(_frame('news-published', {'id': 'n-2'}))

        assert views['news'].ids() == ['n-2', 'n-1']

    def test_files_only_for_selected_section(self):
        views = PortalViews(selected_section='s-1')

        assert views.apply(_frame('file-uploaded', {'id': 'f-1', 'sectionId': 's-1'}))
        assert not views.apply(_frame('file-uploaded', {'id': 'f-2', 'sectionId': 's-2'}))
        assert views.apply(_frame('file-uploaded', {'id': 'f-3', 'section': {'id': 's-1'}}))
        assert views['files'].ids() == ['f-1', 'f-3']

    def test_no_selection_ignores_uploads(self):
        views = PortalViews()
        assert not views.apply(_frame('file-uploaded', {'id': 'f-1', 'sectionId': 's-1'}))

    def test_deleting_selected_section_clears_files(self):
        views = PortalViews()
        views['sections'].reset([{'id': 's-1'}, {'id': 's-2'}])
        views.select_section('s-1', [{'id': 'f-1', 'sectionId': 's-1'}])

        assert views.apply(_frame('section-deleted', 's-1'))

        assert views.selected_section is None
        assert views['files'].items == []
        assert views['sections'].ids() == ['s-2']

    def test_deleting_other_section_keeps_selection(self):
        views = PortalViews()
        views.select_section('s-1', [{'id': 'f-1', 'sectionId': 's-1'}])

        views.apply(_frame('section-deleted', 's-2'))

        assert views.selected_section == 's-1'
        assert views['files'].ids() == ['f-1']

    def test_control_frames_ignored(self):
        views = PortalViews()
        assert not views.apply({'type': 'connected', 'data': {'sessionId': 'x'}})
        assert not views.apply({'type': 'pong'})

    def test_knowledge_events(self):
        views = PortalViews()
        views.apply(_frame('knowledge-added', {'id': 'k-1', 'question': 'Q', 'answer': 'A'}))
        views.apply(_frame('knowledge-added', {'id': 'k-2', 'question': 'Q', 'answer': 'A'}))
        views.apply(_frame('knowledge-deleted', 'k-1'))

        assert views['knowledge'].ids() == ['k-2']
