import threading

from blockfall.controller import DEFAULT_BINDINGS, InputNormalizer, InputSymbol


def test_idle_normalizer_reports_none():
    assert InputNormalizer().current() is InputSymbol.NONE


def test_held_key_repeats_until_released():
    normalizer = InputNormalizer()
    normalizer.press("a")
    assert [normalizer.current() for _ in range(3)] == [InputSymbol.LEFT] * 3
    normalizer.release("a")
    assert normalizer.current() is InputSymbol.NONE


def test_last_pressed_key_wins_and_falls_back():
    normalizer = InputNormalizer()
    normalizer.press("left")
    normalizer.press("right")
    assert normalizer.current() is InputSymbol.RIGHT
    normalizer.release("right")
    assert normalizer.current() is InputSymbol.LEFT


def test_repeat_press_refreshes_recency():
    normalizer = InputNormalizer()
    normalizer.press("s")
    normalizer.press("space")
    normalizer.press("s")
    assert normalizer.current() is InputSymbol.SOFT_DROP
    assert normalizer.held_keys() == ["space", "s"]


def test_unbound_and_unknown_keys_are_ignored():
    normalizer = InputNormalizer()
    normalizer.press("q")
    assert normalizer.current() is InputSymbol.NONE
    normalizer.release("q")
    normalizer.press("D")
    assert normalizer.current() is InputSymbol.RIGHT


def test_reset_forgets_held_keys():
    normalizer = InputNormalizer()
    normalizer.press("up")
    normalizer.press("a")
    normalizer.reset()
    assert normalizer.current() is InputSymbol.NONE
    assert normalizer.held_keys() == []


def test_custom_bindings():
    normalizer = InputNormalizer({"j": InputSymbol.LEFT, "k": InputSymbol.ROTATE})
    normalizer.press("a")
    assert normalizer.current() is InputSymbol.NONE
    normalizer.press("k")
    assert normalizer.current() is InputSymbol.ROTATE
    assert "a" in DEFAULT_BINDINGS


def test_concurrent_updates_always_yield_a_symbol():
    normalizer = InputNormalizer()
    stop = threading.Event()

    def hammer(key: str) -> None:
        while not stop.is_set():
            normalizer.press(key)
            normalizer.release(key)

    workers = [threading.Thread(target=hammer, args=(k,)) for k in ("a", "d", "s")]
    for worker in workers:
        worker.start()
    try:
        seen = {normalizer.current() for _ in range(2000)}
    finally:
        stop.set()
        for worker in workers:
            worker.join()
    assert seen <= set(InputSymbol)
    assert normalizer.current() is InputSymbol.NONE


def test_custom_bindings_ignore_key_case():
    normalizer = InputNormalizer({"A": InputSymbol.LEFT, "Space": InputSymbol.ROTATE})
    normalizer.press("A")
    assert normalizer.current() is InputSymbol.LEFT
    normalizer.press("space")
    assert normalizer.current() is InputSymbol.ROTATE
    normalizer.release("SPACE")
    normalizer.release("a")
    assert normalizer.current() is InputSymbol.NONE
