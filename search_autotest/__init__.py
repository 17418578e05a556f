"""
Search UI test package.

Keeps the framework, page objects and test suites importable for:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - CI/CD module imports
"""
