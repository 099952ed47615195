"""
Test cases for timeout-protected regex matching.
"""

import unittest
from unittest.mock import patch

from jsonlens.core.constants import classify_number
from jsonlens.core.regex_utils import escape_lone_surrogates, safe_regex_fullmatch
from jsonlens.core.tokenizer import TokenType
from jsonlens.preprocessing.extractors import JSONP_NAME_PATTERN


class TestSafeRegexFullmatch(unittest.TestCase):
    """Test safe_regex_fullmatch."""

    def test_whole_string_must_match(self):
        self.assertIsNotNone(safe_regex_fullmatch(r"[a-z]+", "abc"))
        self.assertIsNone(safe_regex_fullmatch(r"[a-z]+", "abc1"))

    def test_jsonp_names(self):
        """Test the function-name pattern used for JSONP wrappers."""
        valid = ["cb", "$", "_x1", "jQuery123_456", "a.b.c", "a['b']", 'a["b"].c', "x[0]"]
        invalid = ["", "1cb", "a b", "var x =", "a-b", "a(b"]

        for name in valid:
            with self.subTest(name=name):
                self.assertIsNotNone(safe_regex_fullmatch(JSONP_NAME_PATTERN, name))
        for name in invalid:
            with self.subTest(name=name):
                self.assertIsNone(safe_regex_fullmatch(JSONP_NAME_PATTERN, name))

    def test_timeout_returns_none(self):
        with patch("jsonlens.core.regex_utils.regex.fullmatch", side_effect=TimeoutError):
            with self.assertLogs("jsonlens.core.regex_utils", level="WARNING"):
                self.assertIsNone(safe_regex_fullmatch(r"(a+)+b", "a" * 40))

    def test_invalid_pattern_returns_none(self):
        self.assertIsNone(safe_regex_fullmatch(r"(unclosed", "unclosed"))


class TestEscapeLoneSurrogates(unittest.TestCase):
    def test_escapes_only_unpaired_surrogates(self):
        self.assertEqual(escape_lone_surrogates("a\udc00b\ud800"), "a\\udc00b\\ud800")
        self.assertEqual(escape_lone_surrogates("\u00e9\U0001f600"), "\u00e9\U0001f600")


class TestClassifyNumber(unittest.TestCase):
    def test_classification(self):
        self.assertIs(classify_number("10"), TokenType.NUMBER)
        self.assertIs(classify_number("-10"), TokenType.NEGATIVE_NUMBER)
        self.assertIs(classify_number("1.0"), TokenType.DECIMAL_NUMBER)
        self.assertIs(classify_number("1E10"), TokenType.EXPONENTIAL_NUMBER)
        self.assertIs(classify_number("-1e-10"), TokenType.EXPONENTIAL_NUMBER_NEGATIVE)


if __name__ == "__main__":
    unittest.main()
