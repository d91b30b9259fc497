from __future__ import annotations

MINUS_SIGN = "\u2212"


class CharacterBuffer:
    """Trimmed input held as a list of codepoints.

    Offsets are codepoint offsets, so multi-byte characters never shift a field.
    The scanner may only shrink the buffer (see delete_range/truncate_prefix),
    which is what bounds the number of rescans.
    """

    def __init__(self, chars: list[str]) -> None:
        self._chars = chars

    @classmethod
    def decompose(cls, text: str) -> "CharacterBuffer":
        return cls([("-" if ch == MINUS_SIGN else ch) for ch in text.strip()])

    def __len__(self) -> int:
        return len(self._chars)

    def __getitem__(self, pos: int) -> str:
        return self._chars[pos]

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def slice(self, pos: int, length: int) -> str:
        return "".join(self._chars[pos : pos + length])

    def remaining(self, pos: int) -> int:
        """Number of codepoints from pos (inclusive) to the end."""
        return max(0, len(self._chars) - pos)

    def next_char_is(self, pos: int, *chars: str) -> bool:
        nxt = pos + 1
        return nxt < len(self._chars) and self._chars[nxt] in chars

    def delete_range(self, pos: int, count: int) -> None:
        if count < 1 or pos < 0 or pos + count > len(self._chars):
            raise ValueError(f"delete_range({pos}, {count}) out of bounds for length {len(self._chars)}")
        del self._chars[pos : pos + count]

    def truncate_prefix(self, pos: int) -> None:
        if pos < 1 or pos > len(self._chars):
            raise ValueError(f"truncate_prefix({pos}) out of bounds for length {len(self._chars)}")
        del self._chars[:pos]
