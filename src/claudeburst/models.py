from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True, slots=True)
class UsageEntry:
    """
    UsageEntry represents a single parsed line
    from a Claude Code JSONL transcript.
    """

    timestamp: "datetime"
    # "user", "assistant", ... or empty when the line has no type
    kind: "str" = ""
    input_tokens: "int" = 0
    output_tokens: "int" = 0
    cache_creation_tokens: "int" = 0
    cache_read_tokens: "int" = 0

    @property
    def total_tokens(self) -> "int":
        return (
            self.input_tokens
            + self.output_tokens
            + self.cache_creation_tokens
            + self.cache_read_tokens
        )


@dataclass(frozen=True, slots=True)
class UsageWindow:
    """
    UsageWindow represents the start and end
    of a usage window. start <= end is not enforced.
    """

    start: "datetime"
    end: "datetime"

    @property
    def duration(self) -> "timedelta":
        return self.end - self.start

    def contains(self, moment: "datetime") -> "bool":
        return self.start <= moment < self.end
