"""
Parsing Module

Usage:
    from storygen.services.infrastructure.parsing import parse_json_response
"""

from .json_parser import (
    parse_json_response,
    require_json_object,
    strip_code_fences,
    extract_largest_balanced_json,
    is_likely_truncated_json,
    fix_json_escapes,
)

__all__ = [
    "parse_json_response",
    "require_json_object",
    "strip_code_fences",
    "extract_largest_balanced_json",
    "is_likely_truncated_json",
    "fix_json_escapes",
]
