"""Pastime logic for a group chat bot: tarot, sign-in, sleep tracking, affection and phrase books."""

__version__ = "0.1.0"