"""
Exception types and the run-level diagnostics counter.

ParseError and ModelFitError are recoverable: the offending record or model
family is excluded and counted. SchemaError and SplitError abort the run.
"""

from collections import Counter


class MovieTierError(Exception):
    """Base class for all pipeline errors."""


class ParseError(MovieTierError):
    """A required field could not be extracted from its raw text."""

    def __init__(self, field, value, message=None):
        self.field = field
        self.value = value
        detail = message or "could not be parsed"
        super().__init__(f"{field}: {detail} (got {value!r})")


class SchemaError(MovieTierError):
    """A configured column is absent from the input."""

    def __init__(self, missing, source="input"):
        self.missing = list(missing)
        super().__init__(f"{source} is missing required column(s): {', '.join(self.missing)}")


class ModelFitError(MovieTierError):
    """A model family cannot be fit on the given training data."""

    def __init__(self, family, message):
        self.family = family
        super().__init__(f"{family}: {message}")


class SplitError(MovieTierError):
    """Split fraction or fold count is incompatible with the dataset size."""


class Diagnostics:
    """Counts of excluded records and failed families, keyed by kind."""

    def __init__(self):
        self.counts = Counter()
        self.messages = []

    def record(self, kind, message=None, n=1):
        self.counts[kind] += n
        if message:
            self.messages.append(f"[{kind}] {message}")

    def record_error(self, error):
        self.record(type(error).__name__, str(error))

    def __getitem__(self, kind):
        return self.counts[kind]

    def as_dict(self):
        return dict(sorted(self.counts.items()))
