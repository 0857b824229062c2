"""Ports for the Groups bounded context: repository protocols and errors."""
