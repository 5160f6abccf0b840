from io import BytesIO

import pandas as pd
import pytest

from utils.sms_service import SMSService


PHONE = '13800000000'


def _signup(client, phone=PHONE, name='阿青', host_type='photography'):
    return client.post('/api/auth/signup', json={'phone': phone, 'name': name, 'hostType': host_type})


def _login(client, phone=PHONE):
    resp = client.post('/api/auth/request-otp', json={'phone': phone})
    assert resp.status_code == 200
    code = SMSService.verification_codes[phone]['code']
    return client.post('/api/auth/login', json={'phone': phone, 'otp': code})


def _submit(client, title='作品', user_id='host-1', category=None):
    payload = {
        'userId': user_id,
        'title': title,
        'description': f'{title} 的介绍',
        'mediaUrls': [f'https://cdn.example.com/{title}.jpg'],
    }
    if category:
        payload['category'] = category
    resp = client.post('/api/entries', json=payload)
    assert resp.status_code == 200
    return resp.get_json()['entry']


def _approve(client, entry_id):
    resp = client.put(f'/api/admin/entries/{entry_id}/status', json={'status': 'approved'})
    assert resp.status_code == 200
    return resp.get_json()['entry']


def test_health(client):
    resp = client.get('/api/health')
    assert resp.status_code == 200
    assert resp.get_json()['status'] == 'ok'


def test_unknown_route_returns_json(client):
    resp = client.get('/api/nothing-here')
    assert resp.status_code == 404
    assert resp.get_json()['success'] is False


def test_signup_and_login_flow(client):
    resp = _signup(client)
    assert resp.status_code == 200
    user = resp.get_json()['user']
    assert user['hostType'] == 'photography'

    assert _signup(client).get_json()['error'] == 'duplicate_user'

    resp = client.post('/api/auth/request-otp', json={'phone': PHONE})
    # 非调试模式不回显验证码
    assert resp.get_json()['code'] is None

    code = SMSService.verification_codes[PHONE]['code']
    resp = client.post('/api/auth/login', json={'phone': PHONE, 'otp': '0000' if code != '0000' else '1111'})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'invalid_otp'

    resp = client.post('/api/auth/login', json={'phone': PHONE, 'otp': code})
    assert resp.status_code == 200

    session_info = client.get('/api/auth/session').get_json()
    assert session_info['logged_in'] is True
    assert session_info['user_id'] == user['id']
    assert session_info['user_role'] == 'host'

    client.post('/api/auth/logout')
    assert client.get('/api/auth/session').get_json()['logged_in'] is False


def test_signup_validation(client):
    resp = client.post('/api/auth/signup', json={'phone': PHONE, 'name': '阿青'})
    assert resp.status_code == 400
    assert resp.get_json()['details']['fields'] == ['hostType']

    resp = client.post('/api/auth/signup', data='phone=1', content_type='text/plain')
    assert resp.status_code == 400

    resp = _signup(client, host_type='astronaut')
    assert resp.status_code == 400


def test_request_otp_unknown_phone(client):
    resp = client.post('/api/auth/request-otp', json={'phone': '13900000000'})
    assert resp.status_code == 404
    assert resp.get_json()['error'] == 'user_not_found'


def test_submit_entry_uses_session_user(client):
    user = _signup(client).get_json()['user']
    _login(client)

    resp = client.post('/api/entries', json={
        'title': '山野徒步',
        'description': '三天两晚',
        'mediaUrls': ['https://cdn.example.com/1.jpg'],
    })
    assert resp.status_code == 200
    entry = resp.get_json()['entry']
    assert entry['userId'] == user['id']
    assert entry['status'] == 'pending'
    assert entry['category'] == 'general'

    resp = client.get(f"/api/users/{user['id']}/entries")
    data = resp.get_json()
    assert [e['id'] for e in data['entries']] == [entry['id']]
    assert data['stats']['totalEntries'] == 1
    assert data['stats']['rank'] is None


def test_submit_entry_validation(client):
    resp = client.post('/api/entries', json={'title': 't', 'description': 'd', 'mediaUrls': []})
    assert resp.status_code == 400

    resp = client.post('/api/entries', json={'title': 't', 'description': 'd', 'mediaUrls': ['x']})
    assert resp.status_code == 400
    assert resp.get_json()['details']['fields'] == ['userId']


def test_vote_and_leaderboard(admin_client):
    client = admin_client
    a = _submit(client, 'a')
    b = _submit(client, 'b', category='photography')
    pending = _submit(client, 'pending')
    _approve(client, a['id'])
    _approve(client, b['id'])

    resp = client.post('/api/votes', json={'entryId': b['id'], 'voterId': 'voter-1'})
    assert resp.status_code == 200
    assert resp.get_json()['totalVotes'] == 1

    resp = client.post('/api/votes', json={'entryId': b['id'], 'voterId': 'voter-1'})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'duplicate_vote'

    assert client.get(f"/api/votes/{b['id']}/voter-1").get_json()['hasVoted'] is True
    assert client.get(f"/api/votes/{a['id']}/voter-1").get_json()['hasVoted'] is False

    resp = client.post('/api/votes', json={'entryId': 'missing', 'voterId': 'voter-1'})
    assert resp.status_code == 404

    data = client.get('/api/leaderboard').get_json()
    assert data['total'] == 2
    assert [row['id'] for row in data['leaderboard']] == [b['id'], a['id']]
    assert pending['id'] not in [row['id'] for row in data['leaderboard']]

    data = client.get('/api/leaderboard?limit=1').get_json()
    assert len(data['leaderboard']) == 1 and data['total'] == 2

    data = client.get('/api/leaderboard?category=photography').get_json()
    assert [row['id'] for row in data['leaderboard']] == [b['id']]

    assert client.get('/api/leaderboard?limit=-1').status_code == 400
    assert client.get('/api/leaderboard?limit=abc').status_code == 400
    assert client.get('/api/leaderboard?category=nope').status_code == 400

    entries = client.get('/api/entries').get_json()['entries']
    assert [e['id'] for e in entries] == [b['id'], a['id']]


def test_jury_score_endpoint(admin_client):
    client = admin_client
    entry = _submit(client, 'a')

    resp = client.post('/api/jury/score', json={'entryId': entry['id'], 'juryId': 'jury-1', 'score': 90})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['juryScore'] == pytest.approx(90)
    assert data['overallScore'] == pytest.approx(54.0)

    resp = client.post('/api/jury/score', json={'entryId': entry['id'], 'juryId': 'jury-1', 'score': 120})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'invalid_score'

    resp = client.post('/api/jury/score', json={'entryId': 'missing', 'juryId': 'jury-1', 'score': 50})
    assert resp.status_code == 200
    assert resp.get_json()['success'] is True

    detail = client.get(f"/api/entries/{entry['id']}").get_json()['entry']
    assert detail['overallScore'] == pytest.approx(54.0)
    assert detail['hostName'] == 'Unknown'
    assert client.get('/api/entries/missing').status_code == 404


def test_admin_guards(client):
    entry = _submit(client, 'a')

    resp = client.put(f"/api/admin/entries/{entry['id']}/status", json={'status': 'approved'})
    assert resp.status_code == 401

    _signup(client)
    _login(client)
    resp = client.get('/api/admin/entries')
    assert resp.status_code == 403

    resp = client.post('/api/admin/login', json={'password': 'wrong'})
    assert resp.status_code == 401
    assert resp.get_json()['error'] == 'authentication_required'


def test_admin_status_and_stats(admin_client):
    client = admin_client
    a = _submit(client, 'a')
    b = _submit(client, 'b')
    _approve(client, a['id'])

    resp = client.put(f"/api/admin/entries/{b['id']}/status", json={'status': 'archived'})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'invalid_status'

    resp = client.put('/api/admin/entries/missing/status', json={'status': 'approved'})
    assert resp.status_code == 404

    listed = client.get('/api/admin/entries').get_json()['entries']
    assert [e['id'] for e in listed] == [b['id'], a['id']]

    listed = client.get('/api/admin/entries?status=pending').get_json()['entries']
    assert [e['id'] for e in listed] == [b['id']]
    assert client.get('/api/admin/entries?status=archived').status_code == 400

    stats = client.get('/api/admin/stats').get_json()['stats']
    assert stats == {'total': 2, 'pending': 1, 'approved': 1, 'rejected': 0}

    client.post('/api/admin/logout')
    assert client.get('/api/admin/stats').status_code == 401


def test_leaderboard_export(admin_client):
    client = admin_client
    a = _submit(client, 'a')
    _approve(client, a['id'])
    client.post('/api/votes', json={'entryId': a['id'], 'voterId': 'voter-1'})

    resp = client.get('/api/admin/leaderboard/export')
    assert resp.status_code == 200
    assert 'spreadsheetml' in resp.mimetype

    df = pd.read_excel(BytesIO(resp.data), engine='openpyxl')
    assert list(df['作品名称']) == ['a']
    assert list(df['票数']) == [1]
    assert list(df['名次']) == [1]


def test_jury_score_rejects_non_text_feedback(client):
    entry = _submit(client, 'a')

    resp = client.post('/api/jury/score', json={
        'entryId': entry['id'], 'juryId': 'jury-1', 'score': 50, 'feedback': 5,
    })
    assert resp.status_code == 400
    data = resp.get_json()
    assert data['error'] == 'validation_error'
    assert data['details'] == {'field': 'feedback'}
