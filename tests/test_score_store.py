import json

from neoflappy.game.controller import GameController
from neoflappy.utils.score_store import BEST_SCORE_KEY, JsonScoreStore, MemoryScoreStore


def test_memory_store_defaults():
    store = MemoryScoreStore()
    assert store.get(BEST_SCORE_KEY) == 0
    store.set(BEST_SCORE_KEY, 4)
    assert store.get(BEST_SCORE_KEY) == 4


def test_json_store_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "best_score.json"
    JsonScoreStore(path).set(BEST_SCORE_KEY, 42)

    assert json.loads(path.read_text()) == {BEST_SCORE_KEY: 42}
    assert JsonScoreStore(path).get(BEST_SCORE_KEY) == 42


def test_corrupt_file_reads_as_zero(tmp_path):
    path = tmp_path / "best_score.json"
    path.write_text("{not json")
    assert JsonScoreStore(path).get(BEST_SCORE_KEY) == 0


def test_non_integer_entry_is_ignored(tmp_path):
    path = tmp_path / "best_score.json"
    path.write_text(json.dumps({BEST_SCORE_KEY: "lots", "other": "7"}))
    store = JsonScoreStore(path)
    assert store.get(BEST_SCORE_KEY) == 0
    assert store.get("other") == 7


def test_unwritable_path_does_not_raise(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    store = JsonScoreStore(blocker / "best_score.json")
    store.set(BEST_SCORE_KEY, 3)
    assert store.get(BEST_SCORE_KEY) == 3


def test_failing_store_never_breaks_game_over(tuning, bus, rng):
    class FailingStore:
        def get(self, key, default=0):
            raise OSError("storage disabled")

        def set(self, key, value):
            raise OSError("storage disabled")

    controller = GameController(tuning=tuning, event_bus=bus, store=FailingStore(), rng=rng)
    assert controller.best_score == 0
    controller.start()
    controller.world.session.score = 3
    assert controller.end()
    assert controller.best_score == 3
