"""A forgiving HTML tokenizer that records UTF-8 byte spans for each token."""

__version__ = "0.1.0"
__all__ = ["cursor", "tokenizer", "tokens"]