"""
Services layer for the Desteli Studio site backend.

This module contains domain-focused service classes that encapsulate
business logic, separating it from HTTP handling in routers.
"""
