"""
Command-line entry points for the Letter Boxed solver.

Usage:
    letterbox solve ABC DEF GHI JKL [--strategy bounded] [--word-limit 2]
    letterbox today [--strategy pair]
    letterbox build-trie [--dictionary words.txt] [--output trie.json]
    letterbox serve [--port 10001]
"""
import argparse
import asyncio
import logging
import sys

import httpx

from letterbox.settings import search_options, settings
from letterbox.solver import STRATEGIES

logger = logging.getLogger("letterbox")


def _load_dictionary(args) -> list[str]:
    from letterbox.sources import fetch_words, load_words

    if args.remote:
        return asyncio.run(fetch_words(settings.WORDLIST_URL, settings.MIN_WORD_LENGTH, settings.FETCH_TIMEOUT))
    return load_words(args.dictionary, settings.MIN_WORD_LENGTH)


def _print_solutions(solutions: list[list[str]]):
    print(f"Solutions ({len(solutions)}):")
    for chain in solutions:
        print("  " + " -> ".join(chain))


def cmd_solve(args) -> int:
    from letterbox.solver import solve

    options = search_options(settings)
    options.word_limit = args.word_limit
    words = _load_dictionary(args)
    _print_solutions(solve(words, args.sides, args.strategy, options))
    return 0


def cmd_today(args) -> int:
    from letterbox.solver import solve
    from letterbox.sources import fetch_live_puzzle

    live = asyncio.run(fetch_live_puzzle(settings.PUZZLE_URL, settings.FETCH_TIMEOUT))
    print(f"Sides: {'-'.join(live.sides)} ({len(live.words)} words)")
    options = search_options(settings)
    options.word_limit = args.word_limit
    _print_solutions(solve(live.words, live.sides, args.strategy, options))
    return 0


def cmd_build_trie(args) -> int:
    from letterbox.sources import save_trie
    from letterbox.trie import Trie

    words = _load_dictionary(args)
    save_trie(Trie.build(words), args.output)
    print(f"Wrote trie of {len(words)} words to {args.output}")
    return 0


def cmd_serve(args) -> int:
    import uvicorn

    uvicorn.run("letterbox.server:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="letterbox", description="Letter Boxed puzzle solver")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_search_args(p):
        p.add_argument("--strategy", choices=sorted(STRATEGIES), default=settings.STRATEGY,
                       help=f"Search strategy (default: {settings.STRATEGY})")
        p.add_argument("--word-limit", type=int, default=settings.WORD_LIMIT,
                       help=f"Maximum words per chain (default: {settings.WORD_LIMIT})")

    def add_dictionary_args(p):
        p.add_argument("--dictionary", default=str(settings.DICTIONARY_PATH),
                       help="Word list file, one word per line")
        p.add_argument("--remote", action="store_true",
                       help="Download the word list instead of reading --dictionary")

    p_solve = sub.add_parser("solve", help="Solve a puzzle given its four sides")
    p_solve.add_argument("sides", nargs=4, help="The four sides, e.g. TLQ SRW NCE OAU")
    add_search_args(p_solve)
    add_dictionary_args(p_solve)
    p_solve.set_defaults(func=cmd_solve)

    p_today = sub.add_parser("today", help="Fetch and solve the live puzzle")
    add_search_args(p_today)
    p_today.set_defaults(func=cmd_today)

    p_trie = sub.add_parser("build-trie", help="Serialize the dictionary trie to JSON")
    add_dictionary_args(p_trie)
    p_trie.add_argument("--output", default=str(settings.TRIE_PATH),
                        help=f"Output path (default: {settings.TRIE_PATH})")
    p_trie.set_defaults(func=cmd_build_trie)

    p_serve = sub.add_parser("serve", help="Run the HTTP front end")
    p_serve.add_argument("--host", default="0.0.0.0")
    p_serve.add_argument("--port", type=int, default=settings.PORT)
    p_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    from letterbox.puzzle import PuzzleError

    logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except PuzzleError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        logger.error("Fetch failed: %s", e)
        print(f"Error: fetch failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
