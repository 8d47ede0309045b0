"""Adapters – ASGI middleware and httpx integration."""
