"""Endpoint modules, one router per resource."""
