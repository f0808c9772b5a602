"""Intellecty Retail: multi-tenant retail-analytics API."""
