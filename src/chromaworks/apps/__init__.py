"""ChromaWorks applications."""
