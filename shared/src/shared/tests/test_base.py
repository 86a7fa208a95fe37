"""
Base class for component tests.

Test classes subclass LaborantTest, set component_name/test_category and
define sync or async test_* methods. They run under pytest (the root
conftest runs the per-test hooks) or standalone via run_as_main().
"""

import asyncio
import inspect
import sys
import time
from abc import ABC
from datetime import datetime
from typing import Callable, List, Optional

from shared.reporter.system_reporter import SystemReporter
from shared.tests.models import IndividualTestResult, TestFileResult, TestStatus
from shared.tests.result_schema import SCHEMA_VERSION, format_output


class LaborantTest(ABC):
    """
    Base class for all component tests with async support.

    Required class attributes:
        component_name: str - Name of component being tested
        test_category: str - "unit", "integration" or "e2e"

    Per-test hooks (all optional):
        setup_test() / async_setup_test() - Before each test
        teardown_test() / async_teardown_test() - After each test

    No __init__ is defined so pytest can collect subclasses directly.

    Example:
        class TestRateLimiter(LaborantTest):
            component_name = "gardien"
            test_category = "unit"

            async def async_setup_test(self):
                self.cache = InMemoryCacheClient()

            async def test_allows_first_attempt(self):
                ...

        if __name__ == "__main__":
            TestRateLimiter.run_as_main()
    """

    component_name: str = "unknown"
    test_category: str = "unit"

    # Optional: write reporter output to <log_dir>/<ClassName>.log
    log_dir: Optional[str] = None

    _reporter: Optional[SystemReporter] = None

    @property
    def reporter(self) -> SystemReporter:
        """Reporter named after the test class, created on first use."""
        if self._reporter is None:
            self._reporter = SystemReporter(
                name=self.__class__.__name__,
                log_dir=self.log_dir,
                level=20,  # INFO
                verbose=1,
            )
        return self._reporter

    # ================================================================
    # LIFECYCLE HOOKS (Override in subclass if needed)
    # ================================================================

    def setup_test(self) -> None:
        """Sync setup before each test."""

    def teardown_test(self) -> None:
        """Sync cleanup after each test."""

    async def async_setup_test(self) -> None:
        """Async setup before each test."""

    async def async_teardown_test(self) -> None:
        """Async cleanup after each test."""

    async def run_setup_hooks(self) -> None:
        """Run sync then async per-test setup."""
        self.setup_test()
        await self.async_setup_test()

    async def run_teardown_hooks(self) -> None:
        """Run async then sync per-test teardown."""
        try:
            await self.async_teardown_test()
        finally:
            self.teardown_test()

    # ================================================================
    # STANDALONE EXECUTION (Do not override)
    # ================================================================

    def _discover_tests(self) -> List[tuple]:
        tests = []
        for name in dir(self):
            if name.startswith("test_"):
                attr = getattr(self, name)
                if callable(attr):
                    tests.append((name, attr))
        return sorted(tests)

    async def _execute_test(
        self, test_name: str, test_method: Callable
    ) -> IndividualTestResult:
        start_time = time.time()
        try:
            await self.run_setup_hooks()
            try:
                outcome = test_method()
                if inspect.isawaitable(outcome):
                    await outcome
            finally:
                await self.run_teardown_hooks()
        except AssertionError as e:
            return IndividualTestResult(
                name=test_name,
                status=TestStatus.FAIL.value,
                duration=time.time() - start_time,
                error=str(e) or "Assertion failed",
            )
        except Exception as e:
            return IndividualTestResult(
                name=test_name,
                status=TestStatus.ERROR.value,
                duration=time.time() - start_time,
                error=f"{type(e).__name__}: {e}",
            )

        return IndividualTestResult(
            name=test_name,
            status=TestStatus.PASS.value,
            duration=time.time() - start_time,
        )

    async def _run_all(self) -> List[IndividualTestResult]:
        return [
            await self._execute_test(name, method)
            for name, method in self._discover_tests()
        ]

    def run_tests(self) -> TestFileResult:
        """
        Run all discovered tests on one event loop.

        Returns:
            TestFileResult with per-test outcomes
        """
        results = asyncio.run(self._run_all())
        return TestFileResult(
            schema_version=SCHEMA_VERSION,
            test_file=self.__class__.__name__,
            component=self.component_name,
            category=self.test_category,
            duration=sum(r.duration for r in results),
            timestamp=datetime.now().isoformat(),
            tests=results,
        )

    @classmethod
    def run_as_main(cls):
        """
        Entry point for `python <test_file>.py`.

        Prints marked JSON results and exits non-zero on failure.
        """
        result = cls().run_tests()
        print(format_output(result.to_dict()))
        sys.exit(0 if result.success else 1)
