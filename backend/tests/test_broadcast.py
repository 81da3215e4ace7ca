from paradox.broadcast import BroadcastHub, EventType, EVENT_MESSAGE


class RecordingSender:
    def __init__(self, failing=()):
        self.sent = []
        self.failing = set(failing)

    def __call__(self, channel_id, message):
        if channel_id in self.failing:
            raise ConnectionError('socket closed')
        self.sent.append((channel_id, message))


def test_publish_reaches_every_registered_channel():
    sender = RecordingSender()
    hub = BroadcastHub(sender=sender)
    hub.register('a')
    hub.register('b')

    message = hub.publish(EventType.SUBMISSION_RECEIVED, teamId=7)

    assert message == {'type': 'SUBMISSION_RECEIVED', 'teamId': 7}
    assert sorted(c for c, _ in sender.sent) == ['a', 'b']
    assert all(m == message for _, m in sender.sent)


def test_unregistered_channel_misses_event():
    sender = RecordingSender()
    hub = BroadcastHub(sender=sender)
    hub.register('a')
    hub.register('b')
    hub.unregister('b')

    hub.publish(EventType.GAME_RESET)

    assert [c for c, _ in sender.sent] == ['a']
    assert sender.sent[0][1] == {'type': 'GAME_RESET'}


def test_failing_channel_is_isolated_and_dropped():
    sender = RecordingSender(failing={'broken'})
    hub = BroadcastHub(sender=sender)
    for cid in ('a', 'broken', 'c'):
        hub.register(cid)

    hub.publish(EventType.ROUND_REVEALED, roundId=1, actualValue=42.0)

    assert sorted(c for c, _ in sender.sent) == ['a', 'c']
    assert hub.channels() == {'a', 'c'}


def test_async_publish_hands_fanout_to_spawner():
    sender = RecordingSender()
    hub = BroadcastHub(sender=sender, run_async=True)
    spawned = []
    hub._spawn = lambda fn, *args: spawned.append((fn, args))
    hub.register('a')

    hub.publish(EventType.SETTINGS_UPDATED, key='game_title', value='X')

    assert sender.sent == []
    fn, args = spawned[0]
    fn(*args)
    assert sender.sent == [('a', {'type': 'SETTINGS_UPDATED', 'key': 'game_title', 'value': 'X'})]


def _events(sio_client):
    return [
        pkt['args'][0] for pkt in sio_client.get_received('/ws')
        if pkt['name'] == EVENT_MESSAGE
    ]


def test_socket_connect_acknowledged(sio_client):
    assert sio_client.is_connected('/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'connected' for pkt in received)

    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'pong' and pkt['args'][0] == {'n': 1} for pkt in received)


def test_round_lifecycle_events_reach_socket(sio_client, client, admin_headers, join):
    sio_client.get_received('/ws')  # flush
    team = join('Owls')

    started = client.post('/api/admin/rounds', json={'theme': 'Rainfall'}, headers=admin_headers).get_json()
    client.post('/api/submissions', json={
        'teamId': team['id'], 'roundId': started['id'], 'predictedValue': 10, 'bidAmount': 5,
    })
    client.post('/api/admin/rounds/reveal', json={'roundId': started['id'], 'actualValue': 10},
                headers=admin_headers)
    client.post('/api/admin/settings', json={'key': 'game_title', 'value': 'FINALS'},
                headers=admin_headers)
    client.post('/api/admin/reset', headers=admin_headers)

    events = _events(sio_client)
    assert [e['type'] for e in events] == [
        'ROUND_STARTED', 'SUBMISSION_RECEIVED', 'ROUND_REVEALED', 'SETTINGS_UPDATED', 'GAME_RESET',
    ]
    assert events[0]['round'] == {'id': started['id'], 'theme': 'Rainfall', 'status': 'open'}
    assert events[1] == {'type': 'SUBMISSION_RECEIVED', 'teamId': team['id']}
    assert events[2] == {'type': 'ROUND_REVEALED', 'roundId': started['id'], 'actualValue': 10.0}
    assert events[3] == {'type': 'SETTINGS_UPDATED', 'key': 'game_title', 'value': 'FINALS'}


def test_failed_request_emits_nothing(sio_client, client):
    sio_client.get_received('/ws')
    res = client.post('/api/submissions', json={'teamId': 1, 'roundId': 1, 'predictedValue': 'x', 'bidAmount': 5})
    assert res.status_code == 400
    assert _events(sio_client) == []


def test_disconnected_socket_is_unregistered(flask_app, sio_client):
    from paradox import hub
    assert len(hub.channels()) == 1
    sio_client.disconnect(namespace='/ws')
    assert hub.channels() == set()


def test_async_publish_falls_back_inline_when_spawn_fails():
    sender = RecordingSender()
    hub = BroadcastHub(sender=sender, run_async=True)

    def broken_spawn(fn, *args):
        raise RuntimeError('no background worker')

    hub._spawn = broken_spawn
    hub.register('a')

    hub.publish(EventType.GAME_RESET)

    assert sender.sent == [('a', {'type': 'GAME_RESET'})]
