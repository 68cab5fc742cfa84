"""Token, cost and progress bookkeeping for a translation run."""

import re
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from po_translation_generator.utils.constants import (
    DEFAULT_INPUT_COST_PER_MILLION_TOKENS,
    DEFAULT_OUTPUT_COST_PER_MILLION_TOKENS,
    TOKENS_PER_MILLION,
)


class TokenCounter(ABC):
    """Estimate how many tokens a text costs."""

    @abstractmethod
    def count(self, text: str) -> int:
        """Return the token count of ``text``."""


class WhitespaceTokenCounter(TokenCounter):
    """
    Word count used as a token estimate.

    Splitting on whitespace, so an empty string counts as one token and
    leading/trailing whitespace adds one.
    """

    def count(self, text: str) -> int:
        return len(re.split(r"\s+", text))


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )


class CostTracker:
    """Accumulates token usage and its estimated cost across a run."""

    def __init__(
        self,
        token_counter: TokenCounter | None = None,
        input_cost_per_million: float = DEFAULT_INPUT_COST_PER_MILLION_TOKENS,
        output_cost_per_million: float = DEFAULT_OUTPUT_COST_PER_MILLION_TOKENS,
    ):
        self.token_counter = token_counter or WhitespaceTokenCounter()
        self.input_cost_per_million = input_cost_per_million
        self.output_cost_per_million = output_cost_per_million
        self.usage = TokenUsage()

    def _count(self, texts: Iterable[str]) -> int:
        return sum(self.token_counter.count(text) for text in texts)

    def record_batch(
        self, input_texts: Iterable[str], output_texts: Iterable[str]
    ) -> TokenUsage:
        """Count the tokens of one provider round-trip and add them to the run."""
        batch_usage = TokenUsage(
            input_tokens=self._count(input_texts),
            output_tokens=self._count(output_texts),
        )
        self.usage += batch_usage
        return batch_usage

    @property
    def input_tokens(self) -> int:
        return self.usage.input_tokens

    @property
    def output_tokens(self) -> int:
        return self.usage.output_tokens

    @property
    def cost(self) -> float:
        """Estimated cost in USD."""
        return (
            self.usage.input_tokens / TOKENS_PER_MILLION * self.input_cost_per_million
            + self.usage.output_tokens
            / TOKENS_PER_MILLION
            * self.output_cost_per_million
        )


@dataclass(frozen=True)
class ProgressUpdate:
    translated: int
    total: int
    percentage: float
    seconds_remaining: float | None


class ProgressTracker:
    """
    Counts processed entries and estimates the remaining time.

    ``callback`` receives a ``ProgressUpdate`` after every change.
    """

    def __init__(
        self,
        total: int,
        callback: Callable[[ProgressUpdate], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.total = total
        self.translated = 0
        self.callback = callback
        self._clock = clock
        self._started_at = clock()

    def advance(self, count: int = 1) -> ProgressUpdate:
        self.translated += count
        update = self.snapshot()
        if self.callback:
            self.callback(update)
        return update

    def snapshot(self) -> ProgressUpdate:
        percentage = 100.0 if not self.total else self.translated / self.total * 100
        seconds_remaining = None
        if self.translated:
            elapsed = self._clock() - self._started_at
            estimated_total = elapsed / self.translated * self.total
            seconds_remaining = max(estimated_total - elapsed, 0.0)
        return ProgressUpdate(
            translated=self.translated,
            total=self.total,
            percentage=percentage,
            seconds_remaining=seconds_remaining,
        )
