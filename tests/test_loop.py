from neoflappy.core.loop import TickDriver


def make_driver(**kwargs):
    ticks = []
    driver = TickDriver(lambda: ticks.append(1), **kwargs)
    return driver, ticks


def test_idle_driver_does_not_tick():
    driver, ticks = make_driver()
    assert driver.pump(16.7) == 0
    assert ticks == []


def test_frame_coupled_mode_ticks_once_per_frame():
    driver, ticks = make_driver()
    driver.start()
    assert driver.pump(5.0) == 1
    assert driver.pump(100.0) == 1
    assert len(ticks) == 2
    assert driver.elapsed_ms == 105.0
    assert driver.tick_count == 2


def test_fixed_timestep_accumulates():
    driver, ticks = make_driver(fixed_timestep=True, tick_rate=60)
    driver.start()
    assert driver.pump(1000 / 60 * 3 + 1) == 3
    assert driver.pump(1000 / 60 / 2) == 0
    assert driver.pump(1000 / 60 / 2) == 1


def test_fixed_timestep_caps_backlog():
    driver, ticks = make_driver(fixed_timestep=True, max_ticks_per_frame=5)
    driver.start()
    assert driver.pump(1000.0) == 5
    # Backlog dropped rather than carried over
    assert driver.pump(0.0) == 0


def test_stop_makes_pending_ticks_no_ops():
    ticks = []
    driver = None

    def on_tick():
        ticks.append(1)
        driver.stop()

    driver = TickDriver(on_tick, fixed_timestep=True)
    driver.start()
    assert driver.pump(1000 / 60 * 4 + 1) == 1
    assert len(ticks) == 1
    assert not driver.running


def test_token_changes_on_start_and_stop():
    driver, _ = make_driver()
    first = driver.token
    driver.start()
    started = driver.token
    driver.stop()
    assert first != started != driver.token


def test_stop_is_idempotent():
    driver, _ = make_driver()
    driver.start()
    driver.stop()
    token = driver.token
    driver.stop()
    assert driver.token == token


def test_reset_counters():
    driver, _ = make_driver()
    driver.start()
    driver.pump(16.0)
    driver.reset_counters()
    assert driver.tick_count == 0
    assert driver.elapsed_ms == 0.0
