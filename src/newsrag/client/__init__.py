"""Command-line clients for ingesting and querying articles."""
