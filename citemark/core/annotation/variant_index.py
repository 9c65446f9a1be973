"""
Multi-pattern occurrence index over a document body.

Builds an Aho-Corasick automaton from every search variant of every
citation and scans the body once, recording all (possibly overlapping)
occurrences of each variant. The engine then claims occurrences in
citation order, which gives the same result as repeatedly replacing
each variant in the body but in a single pass over the text.
"""
from collections import deque
from typing import Dict, Iterable, List, Tuple


class VariantIndex:
    """
    All occurrences of a set of literal patterns in one text.

    Usage:
        index = VariantIndex(["[1]", "[1,2]"], body)
        index.occurrences("[1]")  # [12, 40] (start offsets, ascending)
    """

    def __init__(self, patterns: Iterable[str], text: str):
        """
        Build the automaton and scan the text.

        Args:
            patterns: Literal search strings (empty strings are ignored)
            text: Text to scan
        """
        self._patterns: List[str] = []
        seen = set()
        for pattern in patterns:
            if pattern and pattern not in seen:
                seen.add(pattern)
                self._patterns.append(pattern)

        self._occurrences: Dict[str, List[int]] = {p: [] for p in self._patterns}
        if self._patterns and text:
            self._scan(text)

    def occurrences(self, pattern: str) -> List[int]:
        """Start offsets of every occurrence of pattern, ascending."""
        return self._occurrences.get(pattern, [])

    def _build(self) -> Tuple[List[Dict[str, int]], List[int], List[List[int]]]:
        """Build goto, failure and output tables."""
        goto: List[Dict[str, int]] = [{}]
        output: List[List[int]] = [[]]

        for idx, pattern in enumerate(self._patterns):
            state = 0
            for char in pattern:
                nxt = goto[state].get(char)
                if nxt is None:
                    goto.append({})
                    output.append([])
                    nxt = len(goto) - 1
                    goto[state][char] = nxt
                state = nxt
            output[state].append(idx)

        fail = [0] * len(goto)
        queue = deque(goto[0].values())
        while queue:
            state = queue.popleft()
            for char, nxt in goto[state].items():
                queue.append(nxt)
                f = fail[state]
                while f and char not in goto[f]:
                    f = fail[f]
                candidate = goto[f].get(char, 0)
                fail[nxt] = candidate if candidate != nxt else 0
                output[nxt] = output[nxt] + output[fail[nxt]]

        return goto, fail, output

    def _scan(self, text: str) -> None:
        goto, fail, output = self._build()
        state = 0
        for pos, char in enumerate(text):
            while state and char not in goto[state]:
                state = fail[state]
            state = goto[state].get(char, 0)
            for idx in output[state]:
                pattern = self._patterns[idx]
                self._occurrences[pattern].append(pos - len(pattern) + 1)

        for starts in self._occurrences.values():
            starts.sort()


class ClaimedSpans:
    """
    Claimed [start, end) spans of a text of known length.

    One flag per character, so checking or claiming a span costs its
    length regardless of how many spans are already claimed.
    """

    def __init__(self, size: int):
        self._claimed = bytearray(size)
        self._count = 0

    def overlaps(self, start: int, end: int) -> bool:
        """True when [start, end) intersects any claimed span."""
        return self._claimed.find(1, max(start, 0), end) != -1

    def claim(self, start: int, end: int) -> None:
        """Record [start, end); caller guarantees it does not overlap."""
        start = max(start, 0)
        end = min(end, len(self._claimed))
        if end > start:
            self._claimed[start:end] = b"\x01" * (end - start)
        self._count += 1

    def __len__(self) -> int:
        return self._count
