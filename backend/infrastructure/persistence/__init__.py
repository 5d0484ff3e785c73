"""
Repository implementations.
"""
