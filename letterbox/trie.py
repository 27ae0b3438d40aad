from __future__ import annotations

import json
from typing import Iterable

# Key used for the end-of-word marker in the serialized form.
TERMINAL = "!"
TERMINAL_VALUE = 1


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Trie:
    """Prefix tree over dictionary words with a memoized letter-coverage lookup.

    Node labels (the root-to-node prefix) are not stored on the nodes; they are
    recorded in a side table keyed by node identity when each node is created.
    """

    def __init__(self):
        self.root = TrieNode()
        self.coverage: dict[str, frozenset[str]] = {}
        self._labels: dict[int, str] = {id(self.root): ""}

    def insert(self, word: str):
        node = self.root
        label = ""
        for ch in word:
            label += ch
            if ch not in node.children:
                node.children[ch] = TrieNode()
                self._labels[id(node.children[ch])] = label
            node = node.children[ch]
        node.is_word = True

    @classmethod
    def build(cls, words: Iterable[str]) -> Trie:
        trie = cls()
        for word in words:
            trie.insert(word)
        return trie

    @classmethod
    def build_filtered(cls, words: Iterable[str], allowed_letters: Iterable[str] | None = None) -> Trie:
        """Build a trie of the words spelled only with ``allowed_letters``.

        An empty or missing letter set disables filtering.
        """
        allowed = set(allowed_letters or ())
        if allowed:
            words = (w for w in words if all(ch in allowed for ch in w))
        return cls.build(words)

    def node_at(self, prefix: str) -> TrieNode | None:
        node = self.root
        for ch in prefix:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def contains_prefix(self, word: str) -> bool:
        return self.node_at(word) is not None

    def contains_word(self, word: str) -> bool:
        node = self.node_at(word)
        return node is not None and node.is_word

    def contains_exact(self, word: str) -> bool:
        """True when ``word`` ends here and no longer entry extends it.

        A valid word that is also a prefix of another valid word is not
        reported; use ``contains_word`` for plain membership.
        """
        node = self.node_at(word)
        return node is not None and node.is_word and not node.children

    def letters_in_label(self, node: TrieNode) -> set[str]:
        return set(self._labels.get(id(node), ""))

    def collect_descendant_subtrees(self, node: TrieNode) -> list[TrieNode]:
        """Every node below ``node``; the end-of-word flag is not a node."""
        found: list[TrieNode] = []
        stack = [node]
        while stack:
            current = stack.pop()
            for child in current.children.values():
                found.append(child)
                stack.append(child)
        return found

    def letter_coverage(self, prefix: str) -> frozenset[str] | None:
        """Letters reachable by continuing ``prefix``, or None for an unknown prefix.

        Computed once per prefix and cached in ``self.coverage``.
        """
        cached = self.coverage.get(prefix)
        if cached is not None:
            return cached
        node = self.node_at(prefix)
        if node is None:
            return None
        letters = self.letters_in_label(node)
        for child in self.collect_descendant_subtrees(node):
            letters |= self.letters_in_label(child)
        result = frozenset(letters)
        self.coverage[prefix] = result
        return result

    def words(self) -> list[str]:
        out: list[str] = []
        stack = [(self.root, "")]
        while stack:
            node, label = stack.pop()
            if node.is_word:
                out.append(label)
            for ch, child in node.children.items():
                stack.append((child, label + ch))
        return sorted(out)

    # ---------- Text format ----------

    def to_dict(self) -> dict:
        return _node_to_dict(self.root)

    @classmethod
    def from_dict(cls, raw: dict) -> Trie:
        trie = cls()
        _node_from_dict(raw, trie.root, "", trie._labels)
        return trie

    def serialize(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def deserialize(cls, text: str) -> Trie:
        return cls.from_dict(json.loads(text))


def _node_to_dict(node: TrieNode) -> dict:
    out: dict = {}
    for ch, child in node.children.items():
        out[ch] = _node_to_dict(child)
    if node.is_word:
        out[TERMINAL] = TERMINAL_VALUE
    return out


def _node_from_dict(raw: dict, node: TrieNode, label: str, labels: dict[int, str]):
    for key, value in raw.items():
        if key == TERMINAL:
            node.is_word = True
        else:
            child = node.children[key] = TrieNode()
            labels[id(child)] = label + key
            _node_from_dict(value, child, label + key, labels)
