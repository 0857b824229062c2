"""Application layer for the Groups bounded context.

Application services orchestrate aggregates, repositories and the event
publisher to fulfill use cases, and own the transaction boundaries.
"""
