"""K-Means topic clustering of document term-weight vectors."""

__version__ = "0.1.0"
