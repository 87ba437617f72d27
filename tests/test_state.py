from neoflappy.core.state import State, StateMachine


def test_initial_state_is_menu():
    sm = StateMachine()
    assert sm.state == State.MENU


def test_valid_transition_notifies_listeners():
    sm = StateMachine()
    seen = []
    sm.add_listener(lambda old, new, ctx: seen.append((old, new)))

    assert sm.transition(State.PLAYING)
    assert sm.transition(State.PAUSED)

    assert seen == [(State.MENU, State.PLAYING), (State.PLAYING, State.PAUSED)]


def test_invalid_transition_is_refused_without_raising():
    sm = StateMachine()
    assert not sm.transition(State.PAUSED)
    assert not sm.transition(State.GAME_OVER)
    assert sm.state == State.MENU


def test_paused_cannot_end_the_run():
    sm = StateMachine()
    sm.transition(State.PLAYING)
    sm.transition(State.PAUSED)
    assert not sm.can_transition(State.GAME_OVER)
    assert sm.can_transition(State.MENU)
    assert sm.can_transition(State.PLAYING)


def test_context_updates_are_applied():
    sm = StateMachine()
    sm.transition(State.PLAYING)
    sm.transition(State.GAME_OVER, score=7, best_score=9, data={"reason": "pipe"})
    assert sm.context.score == 7
    assert sm.context.best_score == 9
    assert sm.context.data["reason"] == "pipe"


def test_listener_errors_do_not_break_transition():
    sm = StateMachine()

    def broken(old, new, ctx):
        raise RuntimeError("boom")

    sm.add_listener(broken)
    assert sm.transition(State.PLAYING)
    assert sm.state == State.PLAYING


def test_remove_listener():
    sm = StateMachine()
    seen = []

    def listener(old, new, ctx):
        seen.append(new)

    sm.add_listener(listener)
    sm.remove_listener(listener)
    sm.transition(State.PLAYING)
    assert seen == []
