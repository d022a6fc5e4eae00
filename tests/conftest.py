"""Root test conftest — shared fixtures for all test suites.

Unit test fixtures live in tests/unit/conftest.py and are automatically
available to tests/unit/ via pytest's conftest discovery chain.
"""
