"""
CharacterIterator: turn a character source into a terminated sequence.

The iterator is the only layer that decides whether a failure ends the
sequence or is handed to the consumer:

- a clean end of input, an input that ends inside a sequence, and a source
  that keeps getting interrupted past the retry budget all end iteration;
- every other error is yielded as an element and iteration continues.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from charstream._errors import CharacterError, IoError, NoBytesRead, UnexpectedEndOfInput
from charstream._types import INTERRUPTED_MAXIMUM, CharacterResult, CharSource, Peekable

logger = logging.getLogger(__name__)


class CharacterIterator(Iterator[CharacterResult]):
    """
    Iterator over the characters of any CharSource.

    Yields single-character strings, or CharacterError instances for
    recoverable failures (malformed input in strict mode, I/O errors).

    Attributes:
        max_interruptions: Retries allowed for consecutive interrupted reads.
            A source that is always interrupted is read max_interruptions + 1
            times before iteration stops.
    """

    def __init__(
        self,
        source: CharSource,
        max_interruptions: int = INTERRUPTED_MAXIMUM,
    ) -> None:
        if (
            isinstance(max_interruptions, bool)
            or not isinstance(max_interruptions, int)
            or max_interruptions < 0
        ):
            raise ValueError(
                f"max_interruptions must be a non-negative integer, got {max_interruptions!r}"
            )
        self._source = source
        self.max_interruptions = max_interruptions
        self._interrupted_count = 0
        self._terminated = False
        self._retries_exhausted = False

    @property
    def source(self) -> CharSource:
        """The character source being iterated."""
        return self._source

    @property
    def is_lossy(self) -> bool:
        """Whether the source replaces malformed input."""
        return self._source.is_lossy

    @property
    def interrupted_count(self) -> int:
        """Consecutive interrupted reads since the last successful step."""
        return self._interrupted_count

    @property
    def terminated(self) -> bool:
        """Whether iteration has permanently stopped."""
        return self._terminated

    @property
    def retries_exhausted(self) -> bool:
        """Whether iteration stopped because the source kept being interrupted."""
        return self._retries_exhausted

    def peek(self) -> CharacterResult | None:
        """
        Look at the next element without consuming it.

        Requires a peekable source. Interrupted reads are retried under the
        same budget as iteration; returns None once the iterator has
        terminated.

        Raises:
            TypeError: The source cannot peek
        """
        if not isinstance(self._source, Peekable):
            raise TypeError(f"{type(self._source).__name__} does not support peeking")
        while not self._terminated:
            result = self._source.peek()
            if isinstance(result, IoError) and result.is_interrupted:
                self._absorb_interruption()
                continue
            if result is not None:
                self._interrupted_count = 0
            return result
        return None

    def close(self) -> None:
        """Stop iterating and close the source, if it can be closed."""
        self._terminate("closed")
        close = getattr(self._source, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> CharacterIterator:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __iter__(self) -> CharacterIterator:
        return self

    def __next__(self) -> CharacterResult:
        while not self._terminated:
            try:
                character = self._source.read_char()
            except NoBytesRead:
                self._terminate("end of input")
            except UnexpectedEndOfInput as e:
                self._terminate(f"input ended inside a character ({e.bytes.hex(' ')})")
            except IoError as e:
                if not e.is_interrupted:
                    self._interrupted_count = 0
                    return e
                self._absorb_interruption()
            except CharacterError as e:
                self._interrupted_count = 0
                return e
            else:
                self._interrupted_count = 0
                return character

        raise StopIteration

    def _terminate(self, reason: str) -> None:
        if not self._terminated:
            logger.debug("Character iteration finished: %s", reason)
            self._terminated = True

    def _absorb_interruption(self) -> None:
        """Count one interrupted read, terminating once the retry budget is spent."""
        if self._interrupted_count < self.max_interruptions:
            self._interrupted_count += 1
            logger.debug(
                "Read interrupted, retrying (%d/%d)",
                self._interrupted_count,
                self.max_interruptions,
            )
            return
        logger.warning(
            "Giving up after %d consecutive interrupted reads",
            self._interrupted_count + 1,
        )
        self._retries_exhausted = True
        self._terminate("interruption retries exhausted")
