"""
Standalone test output format.

Results are printed as JSON between markers so wrappers can pick them
out of mixed stdout.
"""

import json
from typing import Any, Dict, Optional

SCHEMA_VERSION = "1.0"

VALID_CATEGORIES = ["unit", "integration", "e2e"]

START_MARKER = "===LABORANT_RESULTS==="
END_MARKER = "===LABORANT_RESULTS_END==="


def format_output(data: Dict[str, Any]) -> str:
    """Wrap results JSON in markers."""
    return f"{START_MARKER}\n{json.dumps(data, indent=2)}\n{END_MARKER}"


def parse_test_output(stdout: str) -> Optional[Dict[str, Any]]:
    """
    Extract results JSON from stdout.

    Returns:
        Parsed dict, or None if markers are missing or JSON is invalid
    """
    start_idx = stdout.find(START_MARKER)
    end_idx = stdout.find(END_MARKER)
    if start_idx == -1 or end_idx == -1 or end_idx < start_idx:
        return None

    try:
        return json.loads(stdout[start_idx + len(START_MARKER) : end_idx].strip())
    except json.JSONDecodeError:
        return None
