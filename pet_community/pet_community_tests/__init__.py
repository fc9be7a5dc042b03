"""
pet_community_tests package

Tests for the pet community auth service:

- Registration, login, logout and token refresh endpoints (`test_auth.py`)
- Profile read/update (`test_profile.py`)
- Bearer token and role guards (`test_dependencies.py`)
- Service layer against a real session (`test_service.py`)
- Password hashing and token helpers (`test_tokens.py`)
- Application-level error handling (`test_app.py`)
"""
