"""Application services, one per API area."""
