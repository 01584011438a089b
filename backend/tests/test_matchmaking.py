from pong.events import ServerEvent
from pong.models import Direction, MatchStatus, Side


def _pair(manager, left='A', right='B'):
    manager.matchmaker.request_match(left)
    return manager.matchmaker.request_match(right)


def test_first_requester_waits(manager, recorder):
    room = manager.matchmaker.request_match('A')
    assert room is None
    assert manager.registry.waiting == 'A'
    assert recorder.names_for('A') == [ServerEvent.WAITING_FOR_OPPONENT]


def test_second_requester_pairs_fifo(manager, recorder):
    room = _pair(manager)
    registry = manager.registry
    assert room is not None
    assert registry.waiting is None
    assert room.players == {Side.LEFT: 'A', Side.RIGHT: 'B'}
    assert registry.side_for('A') == Side.LEFT
    assert registry.side_for('B') == Side.RIGHT
    assert registry.match_id_for('A') == registry.match_id_for('B') == room.id
    assert room.game.status == MatchStatus.PLAYING

    assert recorder.events_for('A', ServerEvent.MATCH_FOUND) == [{'matchId': room.id, 'side': 'left'}]
    assert recorder.events_for('B', ServerEvent.MATCH_FOUND) == [{'matchId': room.id, 'side': 'right'}]
    for sid in ('A', 'B'):
        snapshots = recorder.events_for(sid, ServerEvent.GAME_STATE)
        assert len(snapshots) == 1
        assert snapshots[0]['status'] == 'playing'
    assert recorder.names_for('B') == [ServerEvent.MATCH_FOUND, ServerEvent.GAME_STATE]


def test_third_requester_becomes_new_waiter(manager):
    _pair(manager)
    assert manager.matchmaker.request_match('C') is None
    assert manager.registry.waiting == 'C'
    assert len(manager.registry) == 1
    assert not manager.registry.is_bound('C')


def test_request_while_in_match_is_rejected(manager, recorder):
    room = _pair(manager)
    recorder.clear()
    assert manager.matchmaker.request_match('A') is None
    assert recorder.names_for('A') == [ServerEvent.ERROR]
    assert manager.registry.waiting is None
    assert manager.registry.match_id_for('A') == room.id
    assert len(manager.registry) == 1


def test_waiter_cannot_pair_with_itself(manager, recorder):
    manager.matchmaker.request_match('A')
    assert manager.matchmaker.request_match('A') is None
    assert manager.registry.waiting == 'A'
    assert len(manager.registry) == 0
    assert recorder.names_for('A') == [ServerEvent.WAITING_FOR_OPPONENT] * 2


def test_match_ids_are_unique(manager):
    first = _pair(manager, 'A', 'B')
    second = _pair(manager, 'C', 'D')
    assert first.id != second.id
    assert len(manager.registry) == 2


def test_disconnect_in_match_notifies_opponent_once(manager, recorder):
    room = _pair(manager)
    manager.lifecycle.paddle_move('A', {'direction': 'up', 'matchId': room.id})
    manager.lifecycle.paddle_move('B', {'direction': 'down', 'matchId': room.id})
    recorder.clear()

    manager.lifecycle.disconnect('A')

    assert recorder.names_for('B') == [ServerEvent.OPPONENT_DISCONNECTED]
    assert recorder.names_for('A') == []
    registry = manager.registry
    assert registry.get(room.id) is None
    assert len(registry) == 0
    for sid in ('A', 'B'):
        assert not registry.is_bound(sid)
        assert registry.side_for(sid) is None
        assert registry.intent_for(sid) == Direction.IDLE


def test_opponent_can_queue_again_after_forfeit(manager):
    _pair(manager)
    manager.lifecycle.disconnect('B')
    assert manager.matchmaker.request_match('A') is None
    assert manager.registry.waiting == 'A'


def test_disconnect_while_waiting_clears_slot(manager, recorder):
    manager.matchmaker.request_match('A')
    manager.lifecycle.disconnect('A')
    assert manager.registry.waiting is None
    # next requester waits instead of pairing with a dead connection
    manager.matchmaker.request_match('B')
    assert manager.registry.waiting == 'B'
    assert len(manager.registry) == 0


def test_disconnect_of_unknown_connection_is_harmless(manager, recorder):
    _pair(manager)
    recorder.clear()
    manager.lifecycle.disconnect('Z')
    assert recorder.sent == []
    assert len(manager.registry) == 1


def test_leave_is_treated_like_disconnect(manager, recorder):
    room = _pair(manager)
    recorder.clear()
    manager.lifecycle.leave('B')
    assert recorder.names_for('A') == [ServerEvent.OPPONENT_DISCONNECTED]
    assert manager.registry.get(room.id) is None
    assert not manager.registry.is_bound('A')


def test_leave_while_waiting_clears_slot(manager):
    manager.matchmaker.request_match('A')
    manager.lifecycle.leave('A')
    assert manager.registry.waiting is None


def test_paddle_move_buffers_last_intent(manager, recorder):
    room = _pair(manager)
    recorder.clear()
    assert manager.lifecycle.paddle_move('A', {'direction': 'up', 'matchId': room.id})
    assert manager.lifecycle.paddle_move('A', {'direction': 'down', 'matchId': room.id})
    assert manager.registry.intent_for('A') == Direction.DOWN
    assert manager.registry.intent_for('B') == Direction.IDLE
    assert recorder.sent == []


def test_paddle_move_with_wrong_match_is_rejected(manager, recorder):
    room = _pair(manager)
    manager.lifecycle.paddle_move('A', {'direction': 'up', 'matchId': room.id})
    recorder.clear()
    assert not manager.lifecycle.paddle_move('A', {'direction': 'down', 'matchId': 'NOPE'})
    assert recorder.names_for('A') == [ServerEvent.ERROR]
    assert manager.registry.intent_for('A') == Direction.UP


def test_paddle_move_with_bad_payload_is_rejected(manager, recorder):
    room = _pair(manager)
    recorder.clear()
    assert not manager.lifecycle.paddle_move('A', {'direction': 'sideways', 'matchId': room.id})
    assert not manager.lifecycle.paddle_move('A', None)
    assert not manager.lifecycle.paddle_move('A', 'up')
    assert recorder.names_for('A') == [ServerEvent.ERROR] * 3
    assert manager.registry.intent_for('A') == Direction.IDLE


def test_paddle_move_from_unbound_connection_is_rejected(manager, recorder):
    room = _pair(manager)
    manager.matchmaker.request_match('C')
    recorder.clear()
    assert not manager.lifecycle.paddle_move('C', {'direction': 'up', 'matchId': room.id})
    assert recorder.names_for('C') == [ServerEvent.ERROR]
    assert manager.registry.intent_for('C') == Direction.IDLE
