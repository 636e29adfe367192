"""Taboo - a party word-guessing game for the terminal.

Describe the word on each card without saying any of its taboo words.
Decks are written by Anthropic Claude or drawn from a built-in word bank.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
