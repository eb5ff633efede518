"""Domain layer: entities, value objects, enums, and exceptions.

No imports from application, infrastructure, or api.
"""
