"""Catalyst -- modular Phoenix project setup.

Generates a Phoenix project with ``mix phx.new`` and layers optional feature
modules (background jobs, auth, GraphQL, uploads, tooling, ...) onto it.
"""

__version__ = "0.1.0"
