"""Core: configuration, constants, lifespan, exception handlers, tenant context."""
