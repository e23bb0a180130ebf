"""
Input sanitization for display labels (issuer, account name).

Labels end up inside provisioning URIs and on authenticator screens, so
they are rejected outright when they carry:
- Null bytes
- Control characters
- Script/XSS payloads (basic detection)
"""
import re
from typing import Optional


class InputSanitizer:
    """Validates and sanitizes user input."""

    NULL_BYTE_PATTERN = re.compile(r'\x00')
    CONTROL_CHAR_PATTERN = re.compile(r'[\x00-\x1f\x7f]')
    SCRIPT_PATTERN = re.compile(r'<script|javascript:|onerror|onclick|<iframe|<embed', re.IGNORECASE)

    @staticmethod
    def sanitize_label(value: str, max_length: Optional[int] = None) -> str:
        """
        Sanitize a single-line display label.

        Args:
            value: Input string
            max_length: Optional max length after stripping

        Returns:
            Label with surrounding whitespace removed

        Raises:
            ValueError: If input is empty or contains dangerous patterns
        """
        if not isinstance(value, str):
            raise ValueError("Input must be string")

        if InputSanitizer.NULL_BYTE_PATTERN.search(value):
            raise ValueError("Null bytes not allowed")

        if InputSanitizer.CONTROL_CHAR_PATTERN.search(value):
            raise ValueError("Control characters not allowed")

        if InputSanitizer.SCRIPT_PATTERN.search(value):
            raise ValueError("Script/XSS patterns not allowed")

        value = value.strip()
        if not value:
            raise ValueError("Label cannot be empty")

        if max_length and len(value) > max_length:
            raise ValueError(f"Input exceeds max length of {max_length}")

        return value
