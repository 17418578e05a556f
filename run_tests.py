#!/usr/bin/env python3
# ================================================================================
# Test Runner Script
# ================================================================================
#
# This is the main entry point for executing test suites.
# It builds the pytest command for the selected suite and harness options
# and generates the Allure report afterwards.
#
# Features:
#   - Run framework unit tests (no browser needed)
#   - Run UI tests against a real browser
#   - Profile / browser / headed overrides for the harness config
#   - Generate Allure reports
#
# Usage:
#   python run_tests.py --suite unit
#   python run_tests.py --suite ui --run-e2e --browser Firefox --headed
#   python run_tests.py --suite all --tags P0 smoke --conf edge
#
# ================================================================================

import argparse
import shutil
import subprocess
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from loguru import logger

from search_autotest.common import init_logger
from search_autotest.ui_testing.framework.config_loader import BrowserType


SUITE_PATHS = {
    "unit": ["search_autotest/unit"],
    "ui": ["search_autotest/ui_testing/tests"],
    "all": ["search_autotest/unit", "search_autotest/ui_testing/tests"],
}


class TestRunner:
    """
    Main test runner class for orchestrating test execution.

    This class handles:
    - Test suite selection and execution
    - Harness option pass-through (profile, browser, headed, e2e)
    - Report generation
    """

    def __init__(
        self,
        suite: str = "all",
        tags: Optional[List[str]] = None,
        parallel: int = 1,
        conf: Optional[str] = None,
        browser: Optional[str] = None,
        headed: bool = False,
        run_e2e: bool = False,
        allure_report: bool = True,
        verbose: bool = False,
    ):
        """
        Initialize test runner.

        Args:
            suite: Test suite to run - "unit", "ui", "all"
            tags: List of pytest markers to filter tests
            parallel: Number of parallel workers (pytest-xdist)
            conf: Configuration profile name
            browser: Browser override - Chrome, Edge, Firefox, Safari
            headed: Run the browser with a visible window
            run_e2e: Include end-to-end tests that need a real browser
            allure_report: Generate Allure report
            verbose: Enable verbose output
        """
        self.suite = suite
        self.tags = tags or []
        self.parallel = parallel
        self.conf = conf
        self.browser = browser
        self.headed = headed
        self.run_e2e = run_e2e
        self.allure_report = allure_report
        self.verbose = verbose

        # Paths
        self.root_dir = Path(__file__).parent
        self.reports_dir = self.root_dir / "reports"
        self.allure_results = self.reports_dir / "allure-results"
        self.allure_report_dir = self.reports_dir / "allure-report"

    def run(self) -> int:
        """
        Execute the test run.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        logger.info("=" * 60)
        logger.info("Starting Test Execution")
        logger.info("=" * 60)
        logger.info(f"Suite: {self.suite}")
        logger.info(f"Tags: {self.tags or 'All'}")
        logger.info(f"Parallel Workers: {self.parallel}")
        if self.suite in ["ui", "all"]:
            logger.info(f"Profile: {self.conf or 'default'}")
            logger.info(f"Browser: {self.browser or 'from profile'}")
            logger.info(f"Headed: {self.headed}")
            logger.info(f"End-to-end: {self.run_e2e}")
        logger.info("=" * 60)

        self._prepare_environment()

        cmd = self.build_pytest_command()
        logger.info(f"Executing: {' '.join(cmd)}")

        try:
            exit_code = subprocess.run(cmd, cwd=str(self.root_dir)).returncode
        except OSError as e:
            logger.error(f"Test execution failed: {e}")
            exit_code = 1

        if self.allure_report:
            self._generate_allure_report()

        self._print_summary(exit_code)
        return exit_code

    def _prepare_environment(self) -> None:
        """Prepare test environment."""
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        self.allure_results.mkdir(parents=True, exist_ok=True)
        logger.debug("Environment prepared")

    def build_pytest_command(self) -> List[str]:
        """Build the pytest command with all options."""
        cmd = [sys.executable, "-m", "pytest", *SUITE_PATHS[self.suite]]

        if self.tags:
            cmd.extend(["-m", " or ".join(self.tags)])

        if self.parallel > 1:
            cmd.extend(["-n", str(self.parallel)])

        if self.allure_report:
            cmd.extend(["--alluredir", str(self.allure_results)])

        cmd.append("-v" if self.verbose else "-q")

        # Harness options
        if self.conf:
            cmd.append(f"--conf={self.conf}")
        if self.browser:
            cmd.append(f"--ui-browser={self.browser}")
        if self.headed:
            cmd.append("--ui-headed")
        if self.run_e2e:
            cmd.append("--run-e2e")

        return cmd

    def _generate_allure_report(self) -> None:
        """Generate Allure HTML report."""
        logger.info("Generating Allure report...")

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        report_path = self.reports_dir / f"allure-report-{timestamp}"

        try:
            subprocess.run([
                "allure", "generate",
                str(self.allure_results),
                "-o", str(report_path),
                "--clean",
            ], check=True)
        except FileNotFoundError:
            logger.warning("Allure CLI not found. Please install Allure to generate reports.")
            return
        except subprocess.CalledProcessError as e:
            logger.error(f"Failed to generate Allure report: {e}")
            return

        # Create/update latest symlink
        latest_link = self.allure_report_dir
        if latest_link.is_symlink():
            latest_link.unlink()
        elif latest_link.exists():
            shutil.rmtree(latest_link)
        latest_link.symlink_to(report_path.name)

        logger.info(f"Report generated: {report_path}")
        logger.info(f"Latest report: {self.allure_report_dir}")

    def _print_summary(self, exit_code: int) -> None:
        """Print test execution summary."""
        logger.info("=" * 60)
        if exit_code == 0:
            logger.info("✅ TEST EXECUTION COMPLETED SUCCESSFULLY")
        else:
            logger.error(f"❌ TEST EXECUTION FAILED (exit code: {exit_code})")

        if self.allure_report:
            logger.info(f"📊 Report available at: {self.allure_report_dir}")

        logger.info("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search UI Automation Test Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the framework unit tests
  python run_tests.py --suite unit

  # Run the Google search scenario in a visible Firefox window
  python run_tests.py --suite ui --run-e2e --browser Firefox --headed

  # Run P0 smoke tests with the edge profile
  python run_tests.py --suite all --tags P0 smoke --conf edge --run-e2e
        """
    )

    parser.add_argument(
        "--suite",
        choices=sorted(SUITE_PATHS),
        default="all",
        help="Test suite to run (default: all)"
    )

    parser.add_argument(
        "--tags",
        nargs="+",
        default=[],
        help="Pytest markers to filter tests (e.g., P0 smoke regression)"
    )

    parser.add_argument(
        "--parallel", "-n",
        type=int,
        default=1,
        help="Number of parallel workers (default: 1)"
    )

    parser.add_argument(
        "--conf",
        default=None,
        help="Configuration profile under `config` in config/config.yaml"
    )

    parser.add_argument(
        "--browser",
        choices=[b.value for b in BrowserType],
        default=None,
        help="Browser override for UI tests (default: from profile)"
    )

    parser.add_argument(
        "--headed",
        action="store_true",
        help="Run browser in headed mode (visible)"
    )

    parser.add_argument(
        "--run-e2e",
        action="store_true",
        help="Include end-to-end tests against a real browser and network"
    )

    parser.add_argument(
        "--no-allure",
        action="store_true",
        help="Disable Allure report generation"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def main():
    """Main entry point."""
    init_logger(level="INFO")
    args = build_parser().parse_args()

    runner = TestRunner(
        suite=args.suite,
        tags=args.tags,
        parallel=args.parallel,
        conf=args.conf,
        browser=args.browser,
        headed=args.headed,
        run_e2e=args.run_e2e,
        allure_report=not args.no_allure,
        verbose=args.verbose,
    )

    sys.exit(runner.run())


if __name__ == "__main__":
    main()
