"""
Infrastructure layer.

In-memory persistence, the demo dataset and Django management commands.
"""
