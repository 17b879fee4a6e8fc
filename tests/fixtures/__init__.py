"""
Test fixtures for templating service storage tests.

This package provides:
- Mock implementations of the Motor driver
"""
