"""Core domain: validation, caching, ports and observability."""
