from crudforge.utils.performance import resolve_slow_query_ms


def test_override_wins(monkeypatch):
    monkeypatch.setenv("CRUDFORGE_SLOW_QUERY_MS", "300")
    assert resolve_slow_query_ms(default=100, override=5) == 5


def test_environment_beats_default(monkeypatch):
    monkeypatch.setenv("CRUDFORGE_SLOW_QUERY_MS", "300")
    assert resolve_slow_query_ms(default=100) == 300


def test_invalid_environment_values_fall_back(monkeypatch):
    for raw in ("fast", "-5", "  "):
        monkeypatch.setenv("CRUDFORGE_SLOW_QUERY_MS", raw)
        assert resolve_slow_query_ms(default=100) == 100
    monkeypatch.delenv("CRUDFORGE_SLOW_QUERY_MS")
    assert resolve_slow_query_ms(default=42) == 42
