"""Resolver functions bound to root and relationship fields.

Root resolvers take ``(arguments, store)``; relationship resolvers take
``(parent, store)``. Both return an entity, ``None`` or a sequence of
entities.
"""
