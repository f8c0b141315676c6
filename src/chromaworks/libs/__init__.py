"""Colour primitives shared by the ChromaWorks apps."""
