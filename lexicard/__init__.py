"""LexiCard: vocabulary lookup and Anki card builder."""

__version__ = "0.1.0"
