"""
Shared kernel: base entity and aggregate types, domain events,
exceptions and value objects used by every bounded context.
"""
