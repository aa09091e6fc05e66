"""Trend ingestion, article generation, and publishing services."""
