"""Unit Stats Backend - unit browser and stat preview API.

This package provides a hexagonal architecture implementation over the
``unitstats`` library.

Layers:
- domain: Value objects shared by the API layers
- application: Use cases and port interfaces
- infrastructure: Adapters for external services
- api: REST endpoints and response transformers
"""

__version__ = "1.0.0"
