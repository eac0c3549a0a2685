"""Choose the foods with the most calories that fit within a weight limit."""

__version__ = "0.1.0"
