"""
User Management Module

Layered user management:
- domain: Entities, errors and repository contract
- services: Use cases (register, login, lookup, listing)
- repositories: PostgreSQL data access
- auth: Password hashing, JWT, authentication and RBAC dependencies
- api: REST API endpoints
"""
