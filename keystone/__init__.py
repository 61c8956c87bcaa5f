"""
Keystone

Starter REST backend: registration, JWT login, RBAC and paginated users.
"""

__version__ = "0.1.0"
