"""Argument validators for tool handlers."""

import json
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.exceptions import ToolValidationError


class SQLValidator:
    """Read-only guard for statements sent to the SiYuan index database."""

    # Allowed SQL statement types
    ALLOWED_STATEMENTS = {'SELECT', 'WITH'}  # WITH for CTEs

    # Keywords that would modify the index database
    DANGEROUS_KEYWORDS = {
        'DROP', 'DELETE', 'ALTER', 'CREATE', 'INSERT',
        'UPDATE', 'ATTACH', 'DETACH', 'PRAGMA', 'VACUUM'
    }

    MAX_QUERY_LENGTH = 20000

    _STRING_LITERAL = re.compile(r"'(?:[^']|'')*'")

    @classmethod
    def validate_query(cls, query: str) -> Tuple[bool, str]:
        """
        Validate that a SQL query only reads.

        Args:
            query: SQL query string to validate

        Returns:
            Tuple of (is_valid, error_message)
            - is_valid: True if query passes all checks
            - error_message: Empty string if valid, error description if invalid
        """
        if not query or not query.strip():
            return False, "Empty query"

        query_stripped = query.strip()
        # Keywords inside string literals (LIKE '%delete%') are data, not SQL
        query_upper = cls._STRING_LITERAL.sub("''", query_stripped).upper()

        first_keyword = query_upper.split()[0]
        if first_keyword not in cls.ALLOWED_STATEMENTS:
            allowed = ', '.join(sorted(cls.ALLOWED_STATEMENTS))
            return False, f"Only {allowed} statements are allowed"

        # Whole words only, so "updated" or "created" columns still pass
        for keyword in sorted(cls.DANGEROUS_KEYWORDS):
            if re.search(rf'\b{keyword}\b', query_upper):
                return False, f"Keyword '{keyword}' not allowed in read-only queries"

        if re.search(r'\bREPLACE\s+INTO\b', query_upper):
            return False, "Keyword 'REPLACE' not allowed in read-only queries"

        # Allow trailing semicolon but not in the middle
        if ';' in query_upper.rstrip().rstrip(';'):
            return False, "Multiple statements not allowed"

        if len(query) > cls.MAX_QUERY_LENGTH:
            return False, f"Query too long (max {cls.MAX_QUERY_LENGTH} characters)"

        return True, ""


class InputValidator:
    """Argument extraction helpers that raise ToolValidationError."""

    @staticmethod
    def require_string(args: Dict[str, Any], key: str) -> str:
        """Return ``args[key]`` as a non-empty string."""
        value = args.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ToolValidationError(f"Missing required argument: {key}")
        if not isinstance(value, str):
            raise ToolValidationError(f"{key} must be a string")
        return value

    @staticmethod
    def optional_string(args: Dict[str, Any], key: str) -> Optional[str]:
        value = args.get(key)
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise ToolValidationError(f"{key} must be a string")
        return value

    @staticmethod
    def positive_int(args: Dict[str, Any], key: str, default: int) -> int:
        """Read an integer >= 1, falling back to ``default`` when absent or zero."""
        value = args.get(key)
        if value is None or value == 0 or value == "":
            return default
        if isinstance(value, bool):
            raise ToolValidationError(f"{key} must be a positive integer")
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ToolValidationError(f"{key} must be a positive integer")
        if number < 1:
            raise ToolValidationError(f"{key} must be a positive integer")
        return number

    @staticmethod
    def string_list(args: Dict[str, Any], key: str) -> Optional[List[str]]:
        """Optional list of strings; a single string becomes a one-element list."""
        value = args.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            return list(value)
        raise ToolValidationError(f"{key} must be an array of strings")

    @staticmethod
    def id_list(value: Any, key: str = "from_ids") -> List[str]:
        """
        Coerce an ID argument into a list.

        Accepts an array, a single ID, or a JSON array encoded as a string
        (some clients serialize arrays that way).
        """
        if isinstance(value, (list, tuple)):
            ids = list(value)
        elif isinstance(value, str):
            ids = [value]
            if value.startswith('['):
                try:
                    parsed = json.loads(value)
                except ValueError:
                    parsed = None
                if isinstance(parsed, list):
                    ids = parsed
        else:
            raise ToolValidationError(f"{key} must be a string or array of strings")

        if not ids or not all(isinstance(i, str) and i for i in ids):
            raise ToolValidationError(f"{key} must contain at least one document ID")
        return ids

    @staticmethod
    def exactly_one(args: Dict[str, Any], first: str, second: str, hint: str = "") -> str:
        """
        Name of the single option provided among two mutually exclusive ones.

        Raises:
            ToolValidationError: Neither or both were provided
        """
        has_first = bool(args.get(first))
        has_second = bool(args.get(second))
        if not has_first and not has_second:
            raise ToolValidationError(f"Must provide exactly one of: {first} or {second}{hint}")
        if has_first and has_second:
            raise ToolValidationError(
                f"Cannot provide both {first} and {second} - choose only one"
            )
        return first if has_first else second

    @staticmethod
    def at_least_one(args: Dict[str, Any], keys: Sequence[str]) -> None:
        if not any(args.get(k) for k in keys):
            raise ToolValidationError(f"Must provide at least one of: {', '.join(keys)}")

    @staticmethod
    def string_map(args: Dict[str, Any], key: str) -> Dict[str, str]:
        """Required object whose values are strings (block attributes)."""
        value = args.get(key)
        if not isinstance(value, dict) or not value:
            raise ToolValidationError(f"{key} must be a non-empty object")
        result = {}
        for k, v in value.items():
            if not isinstance(k, str) or not isinstance(v, (str, int, float, bool)):
                raise ToolValidationError(f"{key} values must be strings")
            result[k] = v if isinstance(v, str) else str(v)
        return result
