"""Adapters – backend REST API integration."""
