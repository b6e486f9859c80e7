"""
Test Suite for the Book Catalog API

Test Organization:
- conftest.py: Shared fixtures (per-test app, database, client, sample data)
- test_graphql.py: Catalog queries and mutations
- test_auth.py: Accounts, login, tokens and the anonymous fallback
- test_subscriptions.py: bookAdded over WebSocket
- test_events.py: In-process PubSub
- test_security.py: Password hashing and token signing
- test_config.py: Settings validation
- test_health.py: Health endpoints, app instances, error masking

Running Tests:
    # Install with test dependencies
    pip install -e ".[test]"

    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_graphql.py

    # Run with verbose output
    pytest -v
"""
