# hashbytes Test Suite
"""
Test suite including:
- Unit tests (byte utilities, runtime services)
- Integration tests (digests, batch hashing)
- Security tests (invalid inputs, unsupported hosts)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
