"""Browser UI testing: framework, page objects and test suites."""
