"""Server-rendered blog front end for a headless CMS."""

__version__ = "0.1.0"
