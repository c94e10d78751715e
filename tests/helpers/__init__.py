"""Test helper utilities for job description pipeline tests."""

from .memory_store import InMemoryDocumentStore

__all__ = ["InMemoryDocumentStore"]
