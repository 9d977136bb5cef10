"""Word Memorizer: spaced-repetition vocabulary trainer."""

from memorizer.consts import VERSION

__version__ = VERSION
