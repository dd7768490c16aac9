"""Subject handlers.

Every module in this package exposes ``register(registry)``, which adds
its handlers to a HandlerRegistry. HandlerRegistry.default() discovers
and calls them all.
"""
