"""Infrastructure for the Groups bounded context: ORM models, queries, repositories."""
