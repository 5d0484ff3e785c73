"""
Application layer - use cases over the domain.

The EntityRegistry applies commands to project aggregates and answers
queries with derived views; the factory builds one from Django settings.
"""
