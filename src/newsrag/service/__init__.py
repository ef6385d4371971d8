"""Retrieval-and-answer services: text helpers, vector store, answers, pipeline."""
