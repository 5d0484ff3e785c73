"""
Domain layer - pure Python business logic with no framework imports.
"""
