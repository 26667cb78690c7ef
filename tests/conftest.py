"""
Pytest configuration and shared fixtures for jsonhex tests.

Provides immutable document corpora: documents that must rewrite cleanly and
documents that must fail with a specific error class.
"""

from dataclasses import dataclass

import pytest

import jsonhex


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for rewriter test case data.

    Holds the input document and the error class it must raise, if any.
    """

    description: str
    input_data: bytes
    expected_error: type[jsonhex.ParseError] | None = None


# Adapted from https://json.org/JSON_checker/test/pass1.json, wrapped in an
# object because the top-level value must be one.
PASS1 = b"""{"JSON Test Pattern pass1": [
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}",
        "quotes": "&#34; \\u0022 %22 0x22 034 &#x22;",
        "\\/\\\\\\"\\uCAFE\\uBABE\\uAB98\\uFCDE\\ubcda\\uef4A\\b\\f\\n\\r\\t`1~!@#$%^&*()_+-=[]{}|;:',./<>?"
: "A key can be any string"
    },
    0.5 ,98.6
,
99.44
,

1066,
1e1,
0.1e1,
1e-1,
1e00,2e+00,2e-00
,"rosebud"]}
"""

# https://json.org/JSON_checker/test/pass3.json
PASS3 = b"""{
    "JSON Test Pattern pass3": {
        "The outermost value": "must be an object or array.",
        "In this test": "It is an object."
    }
}
"""


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides documents that must rewrite without error.

    Covers the json.org pass corpus plus multi-byte text and deep nesting.
    """
    return [
        JsonTestCase("pass1.json - complex nested structure", PASS1),
        JsonTestCase(
            "pass2.json - deep nesting",
            b'{"deep": ' + b"[" * 19 + b'"Not too deep"' + b"]" * 19 + b"}",
        ),
        JsonTestCase("pass3.json - simple object", PASS3),
        JsonTestCase("empty object", b"{}"),
        JsonTestCase("surrounding whitespace", b" \r\n\t{ }\n\n"),
        JsonTestCase(
            "multi-byte text",
            '{"grüße": "日本語", "emoji": ["😀", "a😀b"]}'.encode(),
        ),
        JsonTestCase(
            "repeated keys",
            b'{"people": [{"name": "Alice"}, {"name": "Bob"}, '
            b'{"name": "Alice"}]}',
        ),
    ]


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides documents that must fail, with the error each one raises.

    Mostly the json.org JSON_checker failure corpus adapted to an object
    top level, plus encoding failures the corpus does not cover.
    """
    return [
        JsonTestCase(
            "fail1.json - string payload",
            b'"A JSON payload should be an object or array, not a string."',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "array payload",
            b'["top level arrays are rejected"]',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail2.json - unclosed array",
            b'{"Unclosed array": ["Unclosed array"',
            jsonhex.MissingToken,
        ),
        JsonTestCase(
            "fail3.json - unquoted key",
            b'{unquoted_key: "keys must be quoted"}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail4.json - extra comma",
            b'{"a": ["extra comma",]}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail5.json - double extra comma",
            b'{"a": ["double extra comma",,]}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail6.json - missing value",
            b'{"a": [   , "<-- missing value"]}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail7.json - comma after the close",
            b'{"Comma after the close": 1},',
            jsonhex.TrailingContent,
        ),
        JsonTestCase(
            "fail8.json - extra close",
            b'{"Extra close": 1}}',
            jsonhex.MismatchedToken,
        ),
        JsonTestCase(
            "fail9.json - extra comma in object",
            b'{"Extra comma": true,}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail10.json - extra value after close",
            b'{"Extra value after close": true} "misplaced quoted value"',
            jsonhex.TrailingContent,
        ),
        JsonTestCase(
            "fail11.json - illegal expression",
            b'{"Illegal expression": 1 + 2}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail12.json - illegal invocation",
            b'{"Illegal invocation": alert()}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail13.json - leading zeroes",
            b'{"Numbers cannot have leading zeroes": 013}',
            jsonhex.InvalidNumber,
        ),
        JsonTestCase(
            "fail14.json - hex number",
            b'{"Numbers cannot be hex": 0x14}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail15.json - illegal backslash escape",
            b'{"a": ["Illegal backslash escape: \\x15"]}',
            jsonhex.InvalidEscapeSequence,
        ),
        JsonTestCase(
            "fail16.json - naked backslash",
            b'{"a": [\\naked]}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail17.json - octal escape",
            b'{"a": ["Illegal backslash escape: \\017"]}',
            jsonhex.InvalidEscapeSequence,
        ),
        JsonTestCase(
            "fail19.json - missing colon",
            b'{"Missing colon" null}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail20.json - double colon",
            b'{"Double colon":: null}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail21.json - comma instead of colon",
            b'{"Comma instead of colon", null}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail22.json - colon instead of comma",
            b'{"a": ["Colon instead of comma": false]}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail23.json - bad value",
            b'{"a": ["Bad value", truth]}',
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail24.json - single quote",
            b"{\"a\": ['single quote']}",
            jsonhex.UnexpectedToken,
        ),
        JsonTestCase(
            "fail27.json - line break",
            b'{"a": ["line\nbreak"]}',
            jsonhex.MultilineStringNotSupported,
        ),
        JsonTestCase(
            "fail28.json - escaped line break",
            b'{"a": ["line\\\nbreak"]}',
            jsonhex.InvalidEscapeSequence,
        ),
        JsonTestCase(
            "fail29.json - bare exponent",
            b'{"a": [0e]}',
            jsonhex.InvalidNumber,
        ),
        JsonTestCase(
            "fail30.json - signed bare exponent",
            b'{"a": [0e+]}',
            jsonhex.InvalidNumber,
        ),
        JsonTestCase(
            "fail31.json - double exponent sign",
            b'{"a": [0e+-1]}',
            jsonhex.InvalidNumber,
        ),
        JsonTestCase(
            "fail32.json - comma instead of closing brace",
            b'{"Comma instead if closing brace": true,',
            jsonhex.MissingToken,
        ),
        JsonTestCase(
            "fail33.json - mismatch",
            b'{"a": ["mismatch"}}',
            jsonhex.MismatchedToken,
        ),
        JsonTestCase("empty input", b"", jsonhex.MissingToken),
        JsonTestCase("whitespace only", b" \n\t ", jsonhex.MissingToken),
        JsonTestCase("closing bracket first", b"]", jsonhex.MismatchedToken),
        JsonTestCase(
            "unterminated string", b'{"a": "abc', jsonhex.MissingToken
        ),
        JsonTestCase("unterminated literal", b'{"a": nu', jsonhex.MissingToken),
        JsonTestCase("lone minus", b'{"a": -}', jsonhex.InvalidNumber),
        JsonTestCase("trailing point", b'{"a": 1.}', jsonhex.InvalidNumber),
        JsonTestCase("leading point", b'{"a": .5}', jsonhex.UnexpectedToken),
        JsonTestCase("two points", b'{"a": 1.5.3}', jsonhex.InvalidNumber),
        JsonTestCase(
            "short unicode escape",
            b'{"a": "\\u12"}',
            jsonhex.UnterminatedUnicodeEscape,
        ),
        JsonTestCase(
            "non-hex unicode escape",
            b'{"a": "\\u12G4"}',
            jsonhex.InvalidUnicodeEscape,
        ),
        JsonTestCase(
            "truncated utf-8 sequence",
            b'{"a": "\xc3"}',
            jsonhex.InvalidUtf8Encoding,
        ),
        JsonTestCase(
            "stray continuation byte",
            b'{"a": "\x80"}',
            jsonhex.InvalidUtf8Encoding,
        ),
        JsonTestCase(
            "overlong encoding",
            b'{"a": "\xc0\xaf"}',
            jsonhex.InvalidUtf8Encoding,
        ),
        JsonTestCase(
            "encoded surrogate",
            b'{"a": "\xed\xa0\x80"}',
            jsonhex.InvalidCodePoint,
        ),
        JsonTestCase(
            "codepoint beyond U+10FFFF",
            b'{"a": "\xf4\x90\x80\x80"}',
            jsonhex.InvalidCodePoint,
        ),
    ]
