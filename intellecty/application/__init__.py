"""Application layer: services that implement the API's use cases."""
