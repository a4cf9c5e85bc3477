"""Corpus input helpers (file loading and synthetic generation)."""

from .loader import generate_dirichlet_corpus, load_corpus

__all__ = ["generate_dirichlet_corpus", "load_corpus"]
