"""
================================================================================
Soft Assertions
================================================================================

Assertion collector for UI tests: failures are recorded while the test keeps
running, and `assert_all()` raises one AssertionError listing all of them.

Key Features:
- Contains / equality / boolean checks with descriptions
- Combined failure report
- Allure attachment of the failure list

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

import allure
from loguru import logger


@dataclass
class SoftAssertionFailure:
    """Single recorded failure."""
    description: str
    message: str

    def __str__(self) -> str:
        if self.description:
            return f"[{self.description}] {self.message}"
        return self.message


class SoftAssertions:
    """
    Collects assertion failures and reports them together.

    Example:
        softly = SoftAssertions()
        softly.assert_contains(text, "Did you mean:", "nag a ram",
                               description="Did-you-mean section")
        softly.assert_all()

        # Or as a context manager that flushes on exit
        with SoftAssertions() as softly:
            softly.check(page.is_loaded(), "page should be loaded")
    """

    def __init__(self):
        self.failures: List[SoftAssertionFailure] = []
        self.checks = 0

    def __enter__(self) -> "SoftAssertions":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        # Do not mask an exception already propagating from the block
        if exc_type is None:
            self.assert_all()

    def check(self, condition: Any, message: str, description: str = "") -> bool:
        """Record a failure if condition is falsy. Returns the outcome."""
        self.checks += 1
        if condition:
            return True
        failure = SoftAssertionFailure(description, message)
        self.failures.append(failure)
        logger.warning(f"Soft assertion failed: {failure}")
        return False

    def assert_contains(
        self,
        actual: Optional[str],
        *expected: str,
        description: str = "",
    ) -> bool:
        """Check that actual contains every expected substring."""
        text = actual or ""
        missing = [value for value in expected if value not in text]
        return self.check(
            not missing,
            f"Expecting:\n  {text!r}\nto contain:\n  {list(expected)!r}\n"
            f"but could not find:\n  {missing!r}",
            description,
        )

    def assert_equal(self, actual: Any, expected: Any, description: str = "") -> bool:
        return self.check(
            actual == expected,
            f"Expected {expected!r} but was {actual!r}",
            description,
        )

    def assert_true(self, condition: Any, description: str = "") -> bool:
        return self.check(condition, "Expecting value to be true", description)

    @property
    def passed(self) -> bool:
        return not self.failures

    def report(self) -> str:
        lines = [f"{len(self.failures)} of {self.checks} soft assertion(s) failed:"]
        for index, failure in enumerate(self.failures, start=1):
            lines.append(f"{index}) {failure}")
        return "\n".join(lines)

    def assert_all(self) -> None:
        """
        Raise a single AssertionError if any check failed.

        The collector is cleared afterwards, so a second call only reports
        checks made after the first one.
        """
        if self.passed:
            return

        report = self.report()
        allure.attach(
            report,
            name="Soft assertion failures",
            attachment_type=allure.attachment_type.TEXT,
        )
        self.failures = []
        self.checks = 0
        raise AssertionError(report)


__all__ = [
    "SoftAssertions",
    "SoftAssertionFailure",
]
