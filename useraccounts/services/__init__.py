"""Integrations with the stores and delivery channels used by the service."""
