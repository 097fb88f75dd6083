# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redaction of credentials that may end up in log messages."""

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

_RULES: list[tuple[re.Pattern[str], str]] = [
    # Session tokens, in headers and key=value pairs
    (re.compile(r"(bearer\s+)[\w\-.]{20,}", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"((?:token|session)\s*[:=]\s*['\"]?)[\w\-.]{20,}"), rf"\1{_REDACTED}"),
    # Passwords and secrets
    (re.compile(r"((?:password|secret)\s*[:=]\s*['\"]?)[^'\"\s,}]+", re.IGNORECASE), rf"\1{_REDACTED}"),
    # werkzeug hashes: method$salt$digest
    (re.compile(r"\b((?:scrypt|pbkdf2)[^$\s]*\$)[^$\s]+\$[0-9a-f]+"), rf"\1{_REDACTED}"),
    # Database URLs with credentials
    (re.compile(r"\b((?:postgresql|postgres|mysql)(?:\+\w+)?://[^:/\s]+:)[^@\s]+@"), rf"\1{_REDACTED}@"),
    # Raw header dumps
    (re.compile(r"((?:authorization|cookie)\s*:\s*['\"]?)[^'\"]{10,}", re.IGNORECASE), rf"\1{_REDACTED}"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def redact_record(record: dict[str, Any]) -> None:
    record["message"] = sanitize_message(record["message"])
