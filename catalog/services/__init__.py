"""
Services Package

Supporting services used by the GraphQL resolvers:
- security.py: Password hashing and JWT tokens
- events.py: In-process publish/subscribe for subscriptions
"""
