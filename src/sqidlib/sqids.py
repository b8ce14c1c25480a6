"""
Sqids
-----

:class:`Sqids` encodes a list of non-negative integers into a short string id, and
decodes it back. Encoding is deterministic for a given alphabet, minimum length and
blocklist, so the same configuration must be used to decode ids that were
generated earlier.

An instance is immutable after construction and may be shared between threads.
"""

from __future__ import annotations

import logging
import typing as t

from .blocklist import DEFAULT_BLOCKLIST

__all__ = [
    'DEFAULT_ALPHABET',
    'MIN_ALPHABET_LENGTH',
    'MIN_LENGTH_LIMIT',
    'MIN_BLOCKLIST_WORD_LENGTH',
    'MAX_VALUE',
    'SqidsError',
    'ConfigurationError',
    'NumberOutOfRangeError',
    'MaximumAttemptsReached',
    'DecodeOverflowError',
    'Sqids',
]

logger = logging.getLogger(__name__)

DEFAULT_ALPHABET = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'
MIN_ALPHABET_LENGTH = 3
MIN_LENGTH_LIMIT = 255
MIN_BLOCKLIST_WORD_LENGTH = 3
#: Largest number that can be encoded (the signed 64-bit maximum)
MAX_VALUE = 2**63 - 1


class SqidsError(Exception):
    """Base class for Sqids errors."""


class ConfigurationError(SqidsError, ValueError):
    """The alphabet or minimum length is not valid."""


class NumberOutOfRangeError(SqidsError, ValueError):
    """A number passed to :meth:`Sqids.encode` is negative or too large."""

    def __init__(self, value: int) -> None:
        super().__init__(
            f"Encoding supports numbers between 0 and {MAX_VALUE}, got {value}"
        )
        self.value = value


class MaximumAttemptsReached(SqidsError, RuntimeError):
    """Every possible rotation of the alphabet produced a blocklisted id."""


class DecodeOverflowError(SqidsError, OverflowError):
    """A decoded number exceeds :data:`MAX_VALUE`."""


class Sqids:
    """
    Encode and decode Sqids.

    :param alphabet: Characters to use in ids. Must contain at least three unique
        ASCII characters
    :param min_length: Pad ids to at least this many characters (0 to 255)
    :param blocklist: Words that must not appear in ids. If not specified,
        :data:`~sqidlib.blocklist.DEFAULT_BLOCKLIST` is used. Words shorter than
        three characters or with characters outside the alphabet are ignored
    :raises ConfigurationError: If the alphabet or minimum length is invalid

    >>> sqids = Sqids()
    >>> sqids.encode([1, 2, 3])
    '86Rf07'
    >>> sqids.decode('86Rf07')
    [1, 2, 3]
    """

    __slots__ = ('_alphabet', '_min_length', '_blocklist')

    _alphabet: str
    _min_length: int
    _blocklist: t.FrozenSet[str]

    def __init__(
        self,
        alphabet: str = DEFAULT_ALPHABET,
        min_length: int = 0,
        blocklist: t.Optional[t.Iterable[str]] = None,
    ) -> None:
        if len(alphabet) < MIN_ALPHABET_LENGTH:
            raise ConfigurationError(
                f"Alphabet length must be at least {MIN_ALPHABET_LENGTH}"
            )
        if not alphabet.isascii():
            raise ConfigurationError("Alphabet cannot contain multibyte characters")
        if len(set(alphabet)) != len(alphabet):
            raise ConfigurationError("Alphabet must contain unique characters")
        if (
            not isinstance(min_length, int)
            or isinstance(min_length, bool)
            or not 0 <= min_length <= MIN_LENGTH_LIMIT
        ):
            raise ConfigurationError(
                f"Minimum length has to be between 0 and {MIN_LENGTH_LIMIT}"
            )

        if blocklist is None:
            blocklist = DEFAULT_BLOCKLIST
        elif isinstance(blocklist, str):
            raise ConfigurationError("Blocklist must be a collection of words")
        alphabet_chars = set(alphabet.lower())
        words = {word.lower() for word in blocklist}
        filtered = frozenset(
            word
            for word in words
            if len(word) >= MIN_BLOCKLIST_WORD_LENGTH
            and all(c in alphabet_chars for c in word)
        )
        if len(filtered) != len(words):
            logger.debug(
                "Ignoring %d blocklist words that are too short or not in the"
                " alphabet",
                len(words) - len(filtered),
            )

        # Bypass the immutability guard in __setattr__
        object.__setattr__(self, '_alphabet', self.shuffle(alphabet))
        object.__setattr__(self, '_min_length', min_length)
        object.__setattr__(self, '_blocklist', filtered)

    def __setattr__(self, name: str, value: t.Any) -> t.NoReturn:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __delattr__(self, name: str) -> t.NoReturn:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __repr__(self) -> str:
        return (
            f'<{self.__class__.__name__} alphabet={len(self._alphabet)} chars,'
            f' min_length={self._min_length}, blocklist={len(self._blocklist)} words>'
        )

    @property
    def alphabet(self) -> str:
        """Alphabet used for encoding, after shuffling."""
        return self._alphabet

    @property
    def min_length(self) -> int:
        """Minimum length of generated ids."""
        return self._min_length

    @property
    def blocklist(self) -> t.FrozenSet[str]:
        """Lowercase words that will not appear in generated ids."""
        return self._blocklist

    @staticmethod
    def shuffle(alphabet: str) -> str:
        """
        Shuffle an alphabet deterministically.

        This is not a secure shuffle. It produces the same result across all Sqids
        implementations given the same input.
        """
        chars = list(alphabet)
        length = len(chars)
        i = 0
        j = length - 1
        while j > 0:
            r = (i * j + ord(chars[i]) + ord(chars[j])) % length
            chars[i], chars[r] = chars[r], chars[i]
            i += 1
            j -= 1
        return ''.join(chars)

    def encode(self, numbers: t.Sequence[int]) -> str:
        """
        Encode a list of numbers into an id.

        Returns an empty string if there are no numbers.

        :raises TypeError: If a number is not an integer
        :raises NumberOutOfRangeError: If a number is negative or above
            :data:`MAX_VALUE`
        :raises MaximumAttemptsReached: If all possible ids are blocklisted
        """
        if not numbers:
            return ''
        for number in numbers:
            if not isinstance(number, int) or isinstance(number, bool):
                raise TypeError(f"An integer is required, got {number!r}")
            if not 0 <= number <= MAX_VALUE:
                raise NumberOutOfRangeError(number)

        alphabet_length = len(self._alphabet)
        checksum = len(numbers)
        for index, number in enumerate(numbers):
            checksum += index + ord(self._alphabet[number % alphabet_length])

        for increment in range(alphabet_length):
            offset = (checksum % alphabet_length + increment) % alphabet_length
            id_ = self._encode_with_offset(numbers, offset)
            if not self.is_blocked(id_):
                return id_
            logger.debug("Skipping blocklisted id %r", id_)

        logger.warning(
            "No id could be generated for %d numbers as every candidate is"
            " blocklisted",
            len(numbers),
        )
        raise MaximumAttemptsReached(
            "Reached max attempts to re-generate the id; the alphabet is too small"
            " or the blocklist too large"
        )

    def _encode_with_offset(self, numbers: t.Sequence[int], offset: int) -> str:
        alphabet = self._rotate(offset)
        result = [self._alphabet[offset]]
        last = len(numbers) - 1
        for index, number in enumerate(numbers):
            result.append(self._to_id(number, alphabet[1:]))
            if index < last:
                result.append(alphabet[0])
                alphabet = self.shuffle(alphabet)

        id_ = ''.join(result)
        if len(id_) < self._min_length:
            id_ += alphabet[0]
            while len(id_) < self._min_length:
                alphabet = self.shuffle(alphabet)
                id_ += alphabet[: min(self._min_length - len(id_), len(alphabet))]
        return id_

    def decode(self, id_: str) -> t.List[int]:
        """
        Decode an id into a list of numbers.

        Ids containing characters that are not in the alphabet decode to an empty
        list. Decoding stops at padding, returning the numbers read until then.

        :raises DecodeOverflowError: If a number is larger than :data:`MAX_VALUE`
        """
        result: t.List[int] = []
        if not id_:
            return result
        if any(c not in self._alphabet for c in id_):
            return result

        alphabet = self._rotate(self._alphabet.index(id_[0]))
        value = id_[1:]
        while value:
            separator = alphabet[0]
            chunks = value.split(separator)
            if not chunks[0]:
                # Padding starts here
                break
            result.append(self._to_number(chunks[0], alphabet[1:]))
            if len(chunks) > 1:
                alphabet = self.shuffle(alphabet)
            value = separator.join(chunks[1:])
        return result

    def is_blocked(self, id_: str) -> bool:
        """
        Check if an id contains a blocklisted word.

        Ids or words of three characters or less must match exactly. Words that
        start with a digit only match at the start or end of the id. Other words
        match anywhere in the id.
        """
        id_ = id_.lower()
        for word in self._blocklist:
            if len(word) > len(id_):
                continue
            if len(id_) <= 3 or len(word) <= 3:
                if id_ == word:
                    return True
            elif word[0].isdigit():
                if id_.startswith(word) or id_.endswith(word):
                    return True
            elif word in id_:
                return True
        return False

    def _rotate(self, offset: int) -> str:
        """Rotate the alphabet left by offset and reverse it."""
        return (self._alphabet[offset:] + self._alphabet[:offset])[::-1]

    @staticmethod
    def _to_id(number: int, alphabet: str) -> str:
        base = len(alphabet)
        chars: t.List[str] = []
        while True:
            chars.append(alphabet[number % base])
            number //= base
            if number == 0:
                break
        return ''.join(reversed(chars))

    @staticmethod
    def _to_number(id_: str, alphabet: str) -> int:
        base = len(alphabet)
        number = 0
        for char in id_:
            number = number * base + alphabet.find(char)
            if number > MAX_VALUE:
                raise DecodeOverflowError(f"Id segment {id_!r} exceeds {MAX_VALUE}")
        return number


