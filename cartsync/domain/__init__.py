"""
Domain Layer

Cart entities, value objects, pure domain services and the interfaces of the
collaborators the engine depends on.
"""
