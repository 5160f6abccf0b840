import pytest

from errors import EntryNotFound, InvalidStatus, ValidationError
from models import EntryCategory, EntryStatus


def test_submit_entry_defaults(entries, db_manager):
    entry = entries.submit_entry('host-1', ' 山野徒步 ', '三天两晚', ['https://cdn.example.com/1.jpg'])

    assert entry.title == '山野徒步'
    assert entry.category == EntryCategory.GENERAL
    assert entry.status == EntryStatus.PENDING
    assert (entry.total_votes, entry.jury_score, entry.overall_score) == (0, 0, 0)

    assert db_manager.get_entry(entry.entry_id).to_dict() == entry.to_dict()
    assert [e.entry_id for e in db_manager.get_entries_by_user('host-1')] == [entry.entry_id]
    assert [e.entry_id for e in db_manager.get_all_entries()] == [entry.entry_id]


@pytest.mark.parametrize('kwargs', [
    {'user_id': ''},
    {'title': '   '},
    {'description': None},
    {'media_urls': []},
    {'media_urls': 'https://cdn.example.com/1.jpg'},
    {'media_urls': ['https://cdn.example.com/1.jpg', ' ']},
    {'category': 'cooking'},
])
def test_submit_entry_validation(entries, db_manager, kwargs):
    params = {
        'user_id': 'host-1',
        'title': '标题',
        'description': '介绍',
        'media_urls': ['https://cdn.example.com/1.jpg'],
    }
    params.update(kwargs)

    with pytest.raises(ValidationError):
        entries.submit_entry(**params)
    assert db_manager.get_all_entries() == []


def test_user_entries_in_submission_order(make_entry, entries):
    first = make_entry('first', approved=False)
    second = make_entry('second')
    make_entry('other', user_id='host-2')

    listed = entries.get_user_entries('host-1')
    assert [e['id'] for e in listed] == [first.entry_id, second.entry_id]
    assert listed[0]['status'] == 'pending'


def test_entry_detail_includes_host(entries, users, make_entry):
    host = users.register_user('13800000001', '小林', 'culture-craft', email='lin@example.com')
    entry = make_entry('a', user_id=host.user_id)

    detail = entries.get_entry_detail(entry.entry_id)
    assert detail['hostName'] == '小林'
    assert detail['hostType'] == 'culture-craft'
    assert detail['hostEmail'] == 'lin@example.com'

    with pytest.raises(EntryNotFound):
        entries.get_entry_detail('missing')


def test_set_entry_status_errors(entries, make_entry):
    entry = make_entry('a', approved=False)

    with pytest.raises(InvalidStatus):
        entries.set_entry_status(entry.entry_id, 'archived')
    with pytest.raises(EntryNotFound):
        entries.set_entry_status('missing', 'approved')


def test_status_transitions_any_to_any(entries, make_entry):
    entry = make_entry('a', approved=False)
    for status in ('rejected', 'approved', 'pending', 'approved'):
        assert entries.set_entry_status(entry.entry_id, status).status.value == status


def test_host_stats(entries, engine, make_entry):
    assert entries.get_host_stats('host-1') == {
        'totalEntries': 0, 'totalVotes': 0, 'averageScore': 0, 'rank': None,
    }

    leader = make_entry('leader', user_id='host-2')
    mine = make_entry('mine')
    make_entry('draft', approved=False)
    engine.record_vote(leader.entry_id, 'voter-1')
    engine.record_vote(leader.entry_id, 'voter-2')
    engine.record_vote(mine.entry_id, 'voter-1')

    stats = entries.get_host_stats('host-1')
    assert stats['totalEntries'] == 2
    assert stats['totalVotes'] == 1
    assert stats['averageScore'] == pytest.approx(0.2)
    assert stats['rank'] == 2


def test_status_stats(entries, make_entry):
    make_entry('a')
    make_entry('b', approved=False)
    rejected = make_entry('c')
    entries.set_entry_status(rejected.entry_id, 'rejected')

    assert entries.get_status_stats() == {'total': 3, 'pending': 1, 'approved': 1, 'rejected': 1}
