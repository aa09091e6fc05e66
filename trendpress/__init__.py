"""Korean trending-keyword ingestion and news article pipeline."""

__version__ = "0.1.0"
