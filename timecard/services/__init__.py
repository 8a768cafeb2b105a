"""Core ingestion services: parsing, header/column resolution, classification, aggregation, view and export."""
