from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field, replace
from typing import Iterable, NamedTuple, Sequence

from letterbox.ordered import Fringe
from letterbox.puzzle import Letter, Puzzle, candidates, letters_of, parse_puzzle
from letterbox.trie import Trie

logger = logging.getLogger("letterbox")

# Words of three letters or fewer never count towards a chain.
MIN_CHAIN_WORD_LENGTH = 4


class SearchNode(NamedTuple):
    words: tuple[str, ...]
    buffer: tuple[Letter, ...]
    score: float

    @property
    def text(self) -> str:
        return "".join(letter.char for letter in self.buffer)

    @property
    def letters(self) -> set[str]:
        return letters_of(self.words) | set(self.text)


class WordEntry(NamedTuple):
    word: str
    end: Letter


@dataclass
class ScoreWeights:
    new_letter: float = 1.0
    first_word: float = 5.0
    too_many_words: float = -100.0


@dataclass
class SearchOptions:
    word_limit: int = 2
    leaf_words_only: bool = True
    cap_word_length: bool = True
    max_pops: int = 0
    weights: ScoreWeights = field(default_factory=ScoreWeights)


@dataclass
class SearchContext:
    """Everything one strategy run needs. Built per call, never shared."""

    puzzle: Puzzle
    trie: Trie
    options: SearchOptions
    dictionary: list[str] = field(default_factory=list)
    word_list: list[WordEntry] = field(default_factory=list)
    required: frozenset[str] = field(init=False)
    max_word_length: int | None = field(init=False)

    def __post_init__(self):
        self.required = self.puzzle.required_letters
        self.max_word_length = len(self.required) if self.options.cap_word_length else None

    def is_word(self, word: str) -> bool:
        if len(word) < MIN_CHAIN_WORD_LENGTH:
            return False
        if self.options.leaf_words_only:
            return self.trie.contains_exact(word)
        return self.trie.contains_word(word)

    def extensions(self, node: SearchNode) -> list[Letter]:
        """Letters that keep ``node``'s buffer on a dictionary path."""
        prefix = node.text
        if self.max_word_length is not None and len(prefix) >= self.max_word_length:
            return []
        return [
            letter for letter in candidates(self.puzzle, node.buffer[-1])
            if self.trie.contains_prefix(prefix + letter.char)
        ]


class SolutionSet:
    """Deduplicated solutions; one- and two-word chains go to the front."""

    def __init__(self):
        self.items: list[list[str]] = []
        self._seen: set[tuple[str, ...]] = set()

    def __len__(self) -> int:
        return len(self.items)

    def add(self, chain: Sequence[str]) -> bool:
        key = tuple(chain)
        if key in self._seen:
            return False
        self._seen.add(key)
        if len(key) <= 2:
            self.items.insert(0, list(key))
        else:
            self.items.append(list(key))
        logger.debug("Solution: %s", " -> ".join(key))
        return True


def build_restricted_word_list(
    words: Iterable[str],
    puzzle: Puzzle,
    leaf_words_only: bool = True,
    max_word_length: int | None = None,
) -> tuple[Trie, list[WordEntry]]:
    """Find every dictionary word that can be traced on the puzzle.

    Walks the puzzle depth-first from each letter, never stepping between two
    letters of the same side. Returns a trie of just those words and the
    word list with the letter each word ends on.
    """
    full = Trie.build_filtered(words, puzzle.required_letters)
    context = SearchContext(puzzle, full, SearchOptions(leaf_words_only=leaf_words_only, cap_word_length=False))
    context.max_word_length = max_word_length

    seen: set[str] = set()
    word_list: list[WordEntry] = []
    starts = sorted(puzzle.letters, key=lambda letter: letter.char)
    fringe: Fringe[SearchNode] = Fringe([SearchNode((), (letter,), 0.0) for letter in starts])
    while fringe:
        node = fringe.pop_front()
        prefix = node.text
        for letter in context.extensions(node):
            possible = prefix + letter.char
            if possible not in seen and context.is_word(possible):
                seen.add(possible)
                word_list.append(WordEntry(possible, letter))
            fringe.push_front(SearchNode((), node.buffer + (letter,), 0.0))

    logger.info("Restricted word list: %d words", len(word_list))
    return Trie.build(seen), word_list


class Strategy:
    """A search policy. Subclasses decide setup, ordering and pruning."""

    name = ""

    def __init__(self, options: SearchOptions | None = None):
        self.options = options or SearchOptions()

    def prepare(self, words: list[str], puzzle: Puzzle) -> SearchContext:
        raise NotImplementedError

    def search(self, ctx: SearchContext) -> list[list[str]]:
        raise NotImplementedError

    def solve(self, words: Iterable[str], puzzle: Puzzle) -> list[list[str]]:
        return self.search(self.prepare(list(words), puzzle))

    def _restricted_context(self, words: list[str], puzzle: Puzzle) -> SearchContext:
        max_len = len(puzzle.required_letters) if self.options.cap_word_length else None
        trie, word_list = build_restricted_word_list(words, puzzle, self.options.leaf_words_only, max_len)
        return SearchContext(puzzle, trie, self.options, dictionary=words, word_list=word_list)


class FringeStrategy(Strategy):
    """Shared exploration loop: pop a node, try every legal next letter."""

    def seed(self, ctx: SearchContext) -> Fringe[SearchNode]:
        raise NotImplementedError

    def take(self, fringe: Fringe[SearchNode]) -> SearchNode:
        raise NotImplementedError

    def put(self, fringe: Fringe[SearchNode], node: SearchNode):
        raise NotImplementedError

    def expand(self, ctx: SearchContext, node: SearchNode, letter: Letter, solutions: SolutionSet) -> list[SearchNode]:
        raise NotImplementedError

    def search(self, ctx: SearchContext) -> list[list[str]]:
        solutions = SolutionSet()
        fringe = self.seed(ctx)
        pops = 0
        while fringe:
            if ctx.options.max_pops and pops >= ctx.options.max_pops:
                logger.warning("Search budget of %d pops exhausted (%d nodes left)", pops, len(fringe))
                break
            node = self.take(fringe)
            pops += 1
            for letter in ctx.extensions(node):
                for child in self.expand(ctx, node, letter, solutions):
                    self.put(fringe, child)
        logger.info("strategy=%s pops=%d solutions=%d", self.name, pops, len(solutions))
        return solutions.items


class NaiveStrategy(FringeStrategy):
    """Greedy best-first exploration over the whole dictionary.

    The fringe is kept ascending by score and the best node is taken from
    the end. Scores reward new letters and a finished first word, and punish
    every extra word.
    """

    name = "naive"

    def prepare(self, words: list[str], puzzle: Puzzle) -> SearchContext:
        trie = Trie.build_filtered(words, puzzle.required_letters)
        return SearchContext(puzzle, trie, self.options, dictionary=words)

    def seed(self, ctx: SearchContext) -> Fringe[SearchNode]:
        counts = Counter(ch for word in ctx.dictionary for ch in word)
        max_count = max(counts.values(), default=0) or 1
        fringe: Fringe[SearchNode] = Fringe(key=lambda node: node.score)
        for letter in ctx.puzzle.letters:
            fringe.push_sorted(SearchNode((), (letter,), counts.get(letter.char, 1) / max_count))
        return fringe

    def take(self, fringe: Fringe[SearchNode]) -> SearchNode:
        return fringe.pop_back()

    def put(self, fringe: Fringe[SearchNode], node: SearchNode):
        fringe.push_sorted(node)

    def expand(self, ctx, node, letter, solutions):
        weights = ctx.options.weights
        possible = node.text + letter.char
        used = node.letters
        new_letter_bonus = weights.new_letter if letter.char not in used else 0.0
        children = []
        if ctx.is_word(possible):
            chain = node.words + (possible,)
            if used | {letter.char} == ctx.required:
                solutions.add(chain)
            elif len(chain) < ctx.options.word_limit:
                first_word_bonus = weights.first_word * len(set(possible)) if not node.words else 0.0
                penalty = weights.too_many_words if node.words else 0.0
                score = 1 + new_letter_bonus + first_word_bonus + penalty
                children.append(SearchNode(chain, (letter,), score))
        children.append(SearchNode(node.words, node.buffer + (letter,), node.score + new_letter_bonus))
        return children


class BoundedStrategy(FringeStrategy):
    """Depth-first search over puzzle-traceable words with coverage pruning.

    Once a chain has a finished word, a partial word is dropped as soon as
    the letters it could still reach cannot complete the puzzle.
    """

    name = "bounded"

    def prepare(self, words: list[str], puzzle: Puzzle) -> SearchContext:
        ctx = self._restricted_context(words, puzzle)
        for entry in sorted(ctx.word_list, key=lambda e: (-len(e.word), e.word)):
            ctx.trie.letter_coverage(entry.word)
        return ctx

    def seed(self, ctx: SearchContext) -> Fringe[SearchNode]:
        starts = sorted(ctx.puzzle.letters, key=lambda letter: letter.char)
        return Fringe([SearchNode((), (letter,), ord(letter.char)) for letter in starts])

    def take(self, fringe: Fringe[SearchNode]) -> SearchNode:
        return fringe.pop_front()

    def put(self, fringe: Fringe[SearchNode], node: SearchNode):
        fringe.push_front(node)

    def expand(self, ctx, node, letter, solutions):
        possible = node.text + letter.char
        used = node.letters
        if node.words:
            best = ctx.trie.letter_coverage(possible)
            if best is not None and used | best != ctx.required:
                return []
        children = []
        score = ord(letter.char)
        if ctx.is_word(possible):
            chain = node.words + (possible,)
            if used | {letter.char} == ctx.required:
                solutions.add(chain)
            elif len(chain) < ctx.options.word_limit:
                children.append(SearchNode(chain, (letter,), score))
        children.append(SearchNode(node.words, node.buffer + (letter,), score))
        return children


class PairStrategy(Strategy):
    """Exactly two chained words, enumerated from per-letter word buckets."""

    name = "pair"

    def prepare(self, words: list[str], puzzle: Puzzle) -> SearchContext:
        return self._restricted_context(words, puzzle)

    def search(self, ctx: SearchContext) -> list[list[str]]:
        by_first: dict[str, list[str]] = defaultdict(list)
        for entry in ctx.word_list:
            by_first[entry.word[0]].append(entry.word)
        reach = {ch: letters_of(bucket) for ch, bucket in by_first.items()}

        solutions: list[list[str]] = []
        for entry in ctx.word_list:
            following = by_first.get(entry.end.char)
            if not following:
                continue
            if set(entry.word) | reach[entry.end.char] != ctx.required:
                continue
            for second in following:
                if set(entry.word + second) == ctx.required:
                    solutions.append([entry.word, second])
        logger.info("strategy=%s solutions=%d", self.name, len(solutions))
        return solutions


STRATEGIES: dict[str, type[Strategy]] = {
    NaiveStrategy.name: NaiveStrategy,
    BoundedStrategy.name: BoundedStrategy,
    PairStrategy.name: PairStrategy,
}


def solve(
    words: Iterable[str],
    rows: Sequence[str] | Puzzle,
    strategy: str = "bounded",
    options: SearchOptions | None = None,
    word_limit: int | None = None,
) -> list[list[str]]:
    """Solve a letter-box puzzle.

    ``rows`` is either an already parsed Puzzle or the four sides as strings.
    ``word_limit``, when given, overrides ``options.word_limit`` (default 2).
    Returns every chain found, each a list of words in order.
    """
    puzzle = rows if isinstance(rows, Puzzle) else parse_puzzle(rows)
    try:
        strategy_cls = STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"Unknown strategy {strategy!r}, expected one of {sorted(STRATEGIES)}") from None
    logger.info("Solving %s with strategy=%s", "-".join(puzzle.sides), strategy)
    options = options or SearchOptions()
    if word_limit is not None:
        options = replace(options, word_limit=word_limit)
    return strategy_cls(options).solve(words, puzzle)
