from quizgame.games.core.tip_ledger import TipCreditLedger


def test_ensure_initialized_only_sets_credits_once():
    ledger = TipCreditLedger()
    ledger.ensure_initialized(3)
    assert ledger.credits_left == 3

    ledger.consume(10)
    ledger.ensure_initialized(3)
    assert ledger.credits_left == 2


def test_consume_spends_one_credit_and_records_tip():
    ledger = TipCreditLedger()
    ledger.ensure_initialized(2)

    assert ledger.consume(7) is True
    assert ledger.credits_left == 1
    assert ledger.used_tips == [7]


def test_consume_same_tip_twice_is_rejected():
    ledger = TipCreditLedger()
    ledger.ensure_initialized(3)
    ledger.consume(7)

    assert ledger.consume(7) is False
    assert ledger.credits_left == 2
    assert ledger.used_tips == [7]


def test_consume_without_credits_is_a_no_op():
    ledger = TipCreditLedger()
    ledger.ensure_initialized(1)
    ledger.consume(1)

    assert ledger.consume(2) is False
    assert ledger.credits_left == 0
    assert ledger.used_tips == [1]


def test_next_quiz_forgets_used_tips_but_keeps_credits():
    ledger = TipCreditLedger()
    ledger.ensure_initialized(3)
    ledger.consume(1)
    ledger.next_quiz()

    assert ledger.used_tips == []
    assert ledger.credits_left == 2
    assert ledger.consume(1) is True


def test_reset_clears_everything_and_allows_reinitialization():
    ledger = TipCreditLedger()
    ledger.ensure_initialized(3)
    ledger.consume(1)
    ledger.reset()

    assert (ledger.credits_left, ledger.used_tips, ledger.initialized) == (0, [], False)
    ledger.ensure_initialized(3)
    assert ledger.credits_left == 3
