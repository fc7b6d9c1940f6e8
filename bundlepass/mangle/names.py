"""Short replacement names for private class members: $a, $b, ..., $Z, $aa, ..."""

from typing import Final

SHORT_NAME_ALPHABET: Final[str] = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
SHORT_NAME_PREFIX: Final[str] = "$"


def generate_short_name(index: int) -> str:
    """Bijective base-52 name for `index` (0 -> `$a`, 51 -> `$Z`, 52 -> `$aa`)."""
    if index < 0:
        raise ValueError("Short name index cannot be negative")
    base = len(SHORT_NAME_ALPHABET)
    chars: list[str] = []
    while True:
        chars.append(SHORT_NAME_ALPHABET[index % base])
        index = index // base - 1
        if index < 0:
            break
    return SHORT_NAME_PREFIX + "".join(reversed(chars))


class ShortNameAllocator:
    """Monotonic name source for one conversion; never hands out a name twice."""

    __slots__ = ("_next",)

    def __init__(self) -> None:
        self._next = 0

    @property
    def count(self) -> int:
        return self._next

    def allocate(self) -> str:
        name = generate_short_name(self._next)
        self._next += 1
        return name
