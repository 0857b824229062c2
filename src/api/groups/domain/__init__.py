"""Domain layer for the Groups bounded context.

Pure business objects: identifiers, actors, aggregates and events. Nothing
here knows about SQLAlchemy, the publisher or any transport.
"""
