"""Sitio Recommender — needs-based PPA recommendations for community profiles."""

__version__ = "0.3.0"
