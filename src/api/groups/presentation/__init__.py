"""Presentation adapters for the Groups bounded context."""
