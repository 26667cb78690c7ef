"""
Test documents for rewriting benchmarks.

Creates JSON object documents, as UTF-8 bytes, shaped to stress different
parts of the rewriter:
- Different sizes (small/large)
- Different complexity levels (nested/mixed)
- String-heavy content with escape sequences or non-ASCII text
"""

import json
import random
import string
from typing import Any

# Constants for random data generation
_INT_TYPE = 1
_FLOAT_TYPE = 2
_STRING_TYPE = 3
_BOOL_TYPE = 4
_NULL_TYPE = 5
_ESCAPE_PROBABILITY = 0.3
_SEED = 20240115


def generate_test_data(data_type: str) -> bytes:
    """Generates a JSON object document of the given shape."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
        "unicode_heavy": _generate_unicode_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    random.seed(_SEED)
    return json.dumps(generators[data_type](), ensure_ascii=False).encode()


def _generate_small_object() -> dict[str, Any]:
    """Generates a small object (< 1KB) with basic key-value pairs."""
    return {
        "id": 12345,
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }


def _generate_large_object() -> dict[str, Any]:
    """Generates a large object (> 10KB) where many strings repeat."""
    return {
        "user_id": random.randint(1000000, 9999999),
        "profile": {
            "first_name": _random_string(10),
            "last_name": _random_string(12),
            "email": f"{_random_string(8)}@{_random_string(6)}.com",
            "language": random.choice(["en", "es", "fr", "de", "zh"]),
        },
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(random.uniform(1.0, 1000.0), 2),
                "currency": random.choice(["USD", "EUR", "GBP", "JPY"]),
                "description": f"Payment for {_random_string(20)}",
                "status": random.choice(["completed", "pending", "failed"]),
            }
            for i in range(200)
        ],
    }


def _generate_mixed_array() -> dict[str, Any]:
    """Generates an object holding a large array of mixed value types."""
    array: list[Any] = []

    for i in range(500):
        choice = random.randint(1, 6)
        if choice == _INT_TYPE:
            array.append(random.randint(-1000, 1000))
        elif choice == _FLOAT_TYPE:
            array.append(round(random.uniform(-100.0, 100.0), 3))
        elif choice == _STRING_TYPE:
            array.append(_random_string(random.randint(5, 30)))
        elif choice == _BOOL_TYPE:
            array.append(random.choice([True, False]))
        elif choice == _NULL_TYPE:
            array.append(None)
        else:
            array.append({"index": i, "value": _random_string(10)})

    return {"items": array}


def _generate_nested_structure() -> dict[str, Any]:
    """Generates a deeply nested structure."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": depth,
            "data": _random_string(15),
            "items": [create_nested_dict(depth - 1) for _ in range(3)],
            "nested": create_nested_dict(depth - 1),
        }

    return create_nested_dict(6)


def _generate_string_heavy() -> dict[str, Any]:
    """Generates strings full of escape sequences."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(random.choice('"\\/\b\f\n\r\t'))
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "strings": [create_escaped_string() for _ in range(100)],
        "paths": {
            f"key_{i}": f"C:\\Users\\{_random_string(8)}\\file_{i}.txt"
            for i in range(50)
        },
    }


def _generate_unicode_heavy() -> dict[str, Any]:
    """Generates multi-byte UTF-8 text, astral characters included."""
    alphabet = "äöüßéñ日本語中文한국어ελληνικάрусский😀🎉🚀"
    return {
        "texts": [
            "".join(random.choices(alphabet, k=random.randint(5, 40)))
            for _ in range(200)
        ]
    }


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
