"""MovieLog: build-time movie collection pipeline and live enrichment."""

__version__ = "0.1.0"
