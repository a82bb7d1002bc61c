import threading
import time

from quizgame.games.core.game_state import NO_GAME, Playing, SessionGameState
from quizgame.games.core.session_store import GameSessionStore


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def _playing(*answered):
    return Playing(SessionGameState(answered_quiz_ids=set(answered)))


def test_missing_session_loads_as_no_game():
    assert GameSessionStore().load("nobody") is NO_GAME


def test_save_and_load_round_trip():
    store = GameSessionStore()
    state = _playing(1, 2)

    store.save("abc", state)

    assert store.load("abc") is state
    assert len(store) == 1


def test_saving_no_game_drops_the_entry():
    store = GameSessionStore()
    store.save("abc", _playing(1))

    store.save("abc", NO_GAME)

    assert store.load("abc") is NO_GAME
    assert len(store) == 0


def test_sessions_do_not_share_state():
    store = GameSessionStore()
    store.save("a", _playing(1))
    store.save("b", _playing(2, 3))

    assert store.load("a").game.score == 1
    assert store.load("b").game.score == 2


def test_idle_games_expire():
    clock = FakeClock()
    store = GameSessionStore(ttl=60, clock=clock)
    store.save("abc", _playing(1))

    clock.now += 59
    assert isinstance(store.load("abc"), Playing)

    clock.now += 61
    assert store.load("abc") is NO_GAME


def test_purge_expired_drops_only_stale_games():
    clock = FakeClock()
    store = GameSessionStore(ttl=60, clock=clock)
    store.save("old", _playing(1))
    clock.now += 30
    store.save("new", _playing(2))
    clock.now += 40

    assert store.purge_expired() == 1
    assert store.load("old") is NO_GAME
    assert isinstance(store.load("new"), Playing)


def test_save_purges_periodically():
    clock = FakeClock()
    store = GameSessionStore(ttl=10, clock=clock, purge_every=100)
    store.save("old", _playing(1))
    clock.now += 101

    store.save("new", _playing(2))

    assert "old" not in store._states


def test_locked_serializes_read_modify_write(engine):
    store = GameSessionStore()
    sid = "player"

    def answer(quiz_id):
        with store.locked(sid):
            state = store.load(sid)
            time.sleep(0.001)  # widen the race window
            new_state, _ = engine.check_answer(state, quiz_id, "x", "x")
            store.save(sid, new_state)

    threads = [threading.Thread(target=answer, args=(qid,)) for qid in range(1, 21)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.load(sid).game.answered_quiz_ids == set(range(1, 21))
    assert store._locks == {}
