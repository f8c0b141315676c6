"""ChromaWorks: colour identification for colourblind users."""

__version__ = "0.1.0"
