"""
Shared testing utilities.

- LaborantTest: base class for component tests
- Result models and standalone output format
"""

from shared.tests.models import IndividualTestResult, TestFileResult, TestStatus
from shared.tests.result_schema import (
    SCHEMA_VERSION,
    format_output,
    parse_test_output,
)
from shared.tests.test_base import LaborantTest

__all__ = [
    "LaborantTest",
    "TestStatus",
    "IndividualTestResult",
    "TestFileResult",
    "SCHEMA_VERSION",
    "format_output",
    "parse_test_output",
]
