"""HTTP API: routers, endpoints and dependencies."""
