"""Bigram HMM part-of-speech tagger."""

__version__ = "1.0.0"
