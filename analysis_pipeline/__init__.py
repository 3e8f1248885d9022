"""Stage-based analysis pipeline with a thread-safe store of tagged data products."""

__version__ = "0.1.0"