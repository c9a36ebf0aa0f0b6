# accounts/__init__.py
"""
Accounts app - Authentication and tenant membership.

This app provides:
- Company: the tenant
- User: login principal bound to exactly one company, with a role
- CompanySequence: per-company counters (invoice numbers)
- ActorContext: authorization context resolved from the bearer token
"""
