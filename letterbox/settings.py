import os
from dataclasses import dataclass, field
from pathlib import Path

from letterbox.solver import ScoreWeights, SearchOptions


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)
    TRIE_PATH: Path = field(init=False)

    WORDLIST_URL: str = "https://raw.githubusercontent.com/benhoyt/boggle/master/word-list.txt"
    PUZZLE_URL: str = "https://www.nytimes.com/puzzles/letter-boxed"
    FETCH_TIMEOUT: float = 10.0

    MIN_WORD_LENGTH: int = 3
    STRATEGY: str = "bounded"
    WORD_LIMIT: int = 2
    MAX_RESULTS: int = 50
    SEARCH_BUDGET: int = 0

    LEAF_WORDS_ONLY: bool = True
    CAP_WORD_LENGTH: bool = True

    NEW_LETTER_BONUS: float = 1.0
    FIRST_WORD_BONUS: float = 5.0
    TOO_MANY_WORDS_PENALTY: float = -100.0

    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"
        self.TRIE_PATH = self.BASE_DIR / "trie.json"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                setattr(self, fld, _coerce(getattr(self, fld), env_val))


def _coerce(current, value):
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        return str(value).lower() in ("1", "true", "yes")
    if isinstance(current, int):
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"expected a whole number, got {value!r}")
        return int(value)
    if isinstance(current, float):
        return float(value)
    if isinstance(current, Path):
        return Path(value)
    return str(value)


# Fields that may be changed at runtime through /api/settings.
EDITABLE_FIELDS: dict[str, type] = {
    "STRATEGY": str,
    "WORD_LIMIT": int,
    "MAX_RESULTS": int,
    "SEARCH_BUDGET": int,
    "LEAF_WORDS_ONLY": bool,
    "CAP_WORD_LENGTH": bool,
    "NEW_LETTER_BONUS": float,
    "FIRST_WORD_BONUS": float,
    "TOO_MANY_WORDS_PENALTY": float,
    "DEBUG": bool,
}


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **changes) -> dict[str, str]:
    """Apply ``changes`` to ``cfg``. Returns {field: error} for rejected fields."""
    errors: dict[str, str] = {}
    for name, value in changes.items():
        if name not in cfg.__dataclass_fields__:
            errors[name] = "unknown setting"
            continue
        if name not in EDITABLE_FIELDS:
            errors[name] = "not editable"
            continue
        try:
            setattr(cfg, name, _coerce(getattr(cfg, name), value))
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
    return errors


def search_options(cfg: Settings) -> SearchOptions:
    return SearchOptions(
        word_limit=cfg.WORD_LIMIT,
        leaf_words_only=cfg.LEAF_WORDS_ONLY,
        cap_word_length=cfg.CAP_WORD_LENGTH,
        max_pops=cfg.SEARCH_BUDGET,
        weights=ScoreWeights(
            new_letter=cfg.NEW_LETTER_BONUS,
            first_word=cfg.FIRST_WORD_BONUS,
            too_many_words=cfg.TOO_MANY_WORDS_PENALTY,
        ),
    )


settings = Settings()
