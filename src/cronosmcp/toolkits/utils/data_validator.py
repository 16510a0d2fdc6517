"""Data Validation Utilities
==========================

Format checks for on-chain identifiers (addresses, transaction hashes,
CronosId names) and a light structural check for upstream JSON payloads.
"""

import re
from typing import Any, Dict, List, Optional

__all__ = ["DataValidator", "ADDRESS_PATTERN", "TX_HASH_PATTERN", "CRONOS_ID_PATTERN"]

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
TX_HASH_PATTERN = r"^0x[a-fA-F0-9]{64}$"
CRONOS_ID_PATTERN = r"^[a-zA-Z0-9_-]+\.cro$"

_ADDRESS_RE = re.compile(ADDRESS_PATTERN)
_TX_HASH_RE = re.compile(TX_HASH_PATTERN)
_CRONOS_ID_RE = re.compile(CRONOS_ID_PATTERN)


class DataValidator:
    """Utility class for validating identifiers and payload structures."""

    @staticmethod
    def is_valid_address(address: Any) -> bool:
        """True for a 0x-prefixed, 40 hex digit EVM address (any case)."""
        return isinstance(address, str) and bool(_ADDRESS_RE.match(address))

    @staticmethod
    def is_valid_tx_hash(tx_hash: Any) -> bool:
        return isinstance(tx_hash, str) and bool(_TX_HASH_RE.match(tx_hash))

    @staticmethod
    def is_valid_cronos_id(name: Any) -> bool:
        """True for names like ``alice.cro`` (letters, digits, ``_`` and ``-``)."""
        return isinstance(name, str) and bool(_CRONOS_ID_RE.match(name))

    @staticmethod
    def validate_structure(
        data: Any,
        required_fields: Optional[List[str]] = None,
        expected_type: Optional[type] = None,
    ) -> Dict[str, Any]:
        """Validate data structure and return validation results.

        Args:
            data: Data to validate
            required_fields: Required keys for dict data (or the first item of a list)
            expected_type: Expected data type

        Returns:
            dict: Validation results with 'valid' boolean and 'errors' list

        Example:
            ```python
            validation = DataValidator.validate_structure(
                payload, required_fields=["data"], expected_type=dict
            )
            if not validation["valid"]:
                logger.error(f"Data validation failed: {validation['errors']}")
            ```
        """
        errors = []

        if expected_type and not isinstance(data, expected_type):
            errors.append(f"Expected {expected_type.__name__}, got {type(data).__name__}")

        if required_fields:
            if isinstance(data, list) and data:
                first_item = data[0]
                if isinstance(first_item, dict):
                    missing_fields = [field for field in required_fields if field not in first_item]
                    if missing_fields:
                        errors.append(f"Missing required fields in list items: {missing_fields}")
            elif isinstance(data, dict):
                missing_fields = [field for field in required_fields if field not in data]
                if missing_fields:
                    errors.append(f"Missing required fields: {missing_fields}")

        return {
            "valid": len(errors) == 0,
            "errors": errors,
            "data_type": type(data).__name__,
            "size": len(data) if hasattr(data, '__len__') else None,
        }
