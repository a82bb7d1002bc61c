from quizgame.games.core.countdown import CountdownTimer


def test_ten_polls_count_down_to_zero_then_wrap():
    timer = CountdownTimer()
    timer.start(10)

    counts = [timer.poll()["count"] for _ in range(11)]

    assert counts == [9, 8, 7, 6, 5, 4, 3, 2, 1, 0, 10]


def test_count_stays_within_bounds():
    timer = CountdownTimer()
    timer.start(3)
    for _ in range(20):
        assert 0 <= timer.poll()["count"] <= 3


def test_is_new_quiz_reported_on_first_poll_only():
    timer = CountdownTimer()
    timer.start(5)

    first = timer.poll()
    second = timer.poll()

    assert first["isNewQuiz"] is True
    assert second["isNewQuiz"] is False


def test_start_resets_count_and_flags():
    timer = CountdownTimer()
    timer.start(5)
    timer.poll()
    timer.block_refresh = True

    timer.start(5)

    assert timer.snapshot() == {"count": 5, "blockrefresh": False, "isNewQuiz": True}
