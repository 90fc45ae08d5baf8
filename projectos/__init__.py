"""ProjectOS: Markdown project records with an assistant that can create them."""

__version__ = "0.1.0"
