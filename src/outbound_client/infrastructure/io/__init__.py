"""Inbound payload validation for infrastructure adapters."""
