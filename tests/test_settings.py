from pathlib import Path

from letterbox.settings import (
    EDITABLE_FIELDS,
    Settings,
    get_editable_settings,
    search_options,
    update_settings,
)


def _fresh_settings() -> Settings:
    """Create a fresh Settings instance for testing."""
    return Settings()


def test_editable_fields_exist_on_settings():
    """All editable fields must be actual attributes on Settings."""
    cfg = _fresh_settings()
    for field_name in EDITABLE_FIELDS:
        assert hasattr(cfg, field_name), f"{field_name} not found on Settings"


def test_derived_paths():
    cfg = Settings(BASE_DIR=Path("/tmp/lb"))
    assert cfg.DICTIONARY_PATH == Path("/tmp/lb/dictionary.txt")
    assert cfg.TRIE_PATH == Path("/tmp/lb/trie.json")


def test_env_override(monkeypatch):
    monkeypatch.setenv("WORD_LIMIT", "3")
    monkeypatch.setenv("LEAF_WORDS_ONLY", "false")
    monkeypatch.setenv("FIRST_WORD_BONUS", "2.5")
    monkeypatch.setenv("STRATEGY", "pair")
    cfg = _fresh_settings()
    assert cfg.WORD_LIMIT == 3
    assert cfg.LEAF_WORDS_ONLY is False
    assert cfg.FIRST_WORD_BONUS == 2.5
    assert cfg.STRATEGY == "pair"


def test_get_editable_settings():
    cfg = _fresh_settings()
    result = get_editable_settings(cfg)
    assert set(result.keys()) == set(EDITABLE_FIELDS.keys())
    assert result["STRATEGY"] == cfg.STRATEGY
    assert result["MAX_RESULTS"] == cfg.MAX_RESULTS


def test_update_int_field():
    cfg = _fresh_settings()
    errors = update_settings(cfg, WORD_LIMIT=3)
    assert errors == {}
    assert cfg.WORD_LIMIT == 3


def test_update_bool_field():
    cfg = _fresh_settings()
    original = cfg.DEBUG
    errors = update_settings(cfg, DEBUG=not original)
    assert errors == {}
    assert cfg.DEBUG is (not original)


def test_update_bool_from_string():
    cfg = _fresh_settings()
    errors = update_settings(cfg, CAP_WORD_LENGTH="false")
    assert errors == {}
    assert cfg.CAP_WORD_LENGTH is False

    errors = update_settings(cfg, CAP_WORD_LENGTH="true")
    assert errors == {}
    assert cfg.CAP_WORD_LENGTH is True


def test_update_float_field():
    cfg = _fresh_settings()
    errors = update_settings(cfg, TOO_MANY_WORDS_PENALTY=-50)
    assert errors == {}
    assert cfg.TOO_MANY_WORDS_PENALTY == -50.0


def test_update_string_field():
    cfg = _fresh_settings()
    errors = update_settings(cfg, STRATEGY="naive")
    assert errors == {}
    assert cfg.STRATEGY == "naive"


def test_update_multiple_fields():
    cfg = _fresh_settings()
    errors = update_settings(cfg, MAX_RESULTS=10, SEARCH_BUDGET=500, STRATEGY="pair")
    assert errors == {}
    assert cfg.MAX_RESULTS == 10
    assert cfg.SEARCH_BUDGET == 500
    assert cfg.STRATEGY == "pair"


def test_update_non_editable_field_returns_error():
    cfg = _fresh_settings()
    errors = update_settings(cfg, PORT=8080)
    assert "PORT" in errors
    assert cfg.PORT != 8080


def test_update_unknown_field_returns_error():
    cfg = _fresh_settings()
    errors = update_settings(cfg, NONEXISTENT_FIELD=42)
    assert "NONEXISTENT_FIELD" in errors


def test_update_unparsable_value_returns_error():
    cfg = _fresh_settings()
    errors = update_settings(cfg, WORD_LIMIT="lots")
    assert "WORD_LIMIT" in errors
    assert cfg.WORD_LIMIT == 2


def test_update_partial_error():
    """Valid fields update even when invalid fields are present."""
    cfg = _fresh_settings()
    errors = update_settings(cfg, MAX_RESULTS=25, BAD_FIELD="nope")
    assert "BAD_FIELD" in errors
    assert cfg.MAX_RESULTS == 25


def test_search_options_follow_settings():
    cfg = _fresh_settings()
    update_settings(cfg, WORD_LIMIT=3, SEARCH_BUDGET=100, LEAF_WORDS_ONLY=False, NEW_LETTER_BONUS=2.0)
    options = search_options(cfg)
    assert options.word_limit == 3
    assert options.max_pops == 100
    assert options.leaf_words_only is False
    assert options.cap_word_length is True
    assert options.weights.new_letter == 2.0
    assert options.weights.too_many_words == cfg.TOO_MANY_WORDS_PENALTY


def test_update_int_rejects_fractional():
    cfg = _fresh_settings()
    errors = update_settings(cfg, WORD_LIMIT=2.5)
    assert "WORD_LIMIT" in errors
    assert cfg.WORD_LIMIT == 2

    errors = update_settings(cfg, WORD_LIMIT=3.0)
    assert errors == {}
    assert cfg.WORD_LIMIT == 3
