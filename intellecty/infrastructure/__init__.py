"""Infrastructure: Redis cache and outbound HTTP clients."""
