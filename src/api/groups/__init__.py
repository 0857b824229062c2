"""Groups bounded context.

Group creation, membership, bookmarks and the private/public visibility
rules that decide which groups an actor may read.
"""
