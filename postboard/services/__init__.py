"""
postboard services package.

Core Services:
- auth_service: registration, login and public user lookups
"""
