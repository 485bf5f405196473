from sopot.optional import then, then_some


def test_then_true_calls_and_returns():
    marker = object()
    calls = []

    def produce():
        calls.append(1)
        return marker

    assert then(True, produce) is marker
    assert calls == [1]


def test_then_false_does_not_call():
    calls = []
    result = then(False, lambda: calls.append(1))
    assert result is None
    assert calls == []


def test_then_with_side_effect_only():
    calls = []
    then(True, lambda: calls.append("ran"))
    assert calls == ["ran"]


def test_then_some():
    marker = object()
    assert then_some(True, marker) is marker
    assert then_some(False, marker) is None
    assert then_some(True, 0) == 0