"""Parser-free indentation guides for text buffers."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "guides",
    "runtime",
]

__version__ = "0.1.0"
