"""Test package for Fuseki.

This package contains all test modules organized by test type:
- unit/: Unit tests for individual components
- components/: Component tests with real implementations
- e2e/: End-to-end tests
"""
