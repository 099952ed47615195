"""
Test cases for the exception taxonomy and error reporting.
"""

import unittest

from jsonlens.core.tokenizer import Position
from jsonlens.security.exceptions import (
    ErrorReporter,
    ExtractionError,
    ExtractionReason,
    JsonLensError,
    NothingToRenderError,
    SecurityError,
    ShapeError,
    TokenStreamError,
)


class TestExceptionHierarchy(unittest.TestCase):
    """Test how the error families relate."""

    def test_everything_is_a_jsonlens_error(self):
        for cls in (ExtractionError, NothingToRenderError, TokenStreamError,
                    ShapeError, SecurityError):
            with self.subTest(cls=cls.__name__):
                self.assertTrue(issubclass(cls, JsonLensError))

    def test_nothing_to_render_is_an_extraction_error(self):
        error = NothingToRenderError(ExtractionReason.EMPTY_CONTAINER)
        self.assertIsInstance(error, ExtractionError)
        self.assertEqual(str(error), "empty object or array")

    def test_token_stream_errors_are_not_extraction_errors(self):
        self.assertFalse(issubclass(TokenStreamError, ExtractionError))

    def test_reason_values(self):
        self.assertEqual(ExtractionReason.NO_CLOSING_PAREN.value, "no closing paren")
        self.assertEqual(
            ExtractionReason.NOT_A_CONTAINER.value,
            "technically JSON but not an object or array",
        )


class TestErrorReporter(unittest.TestCase):
    """Test positioned error construction."""

    def test_message_with_position(self):
        error = JsonLensError("Bad token", position=Position(3, 7))
        self.assertEqual(str(error), "Bad token at line 3, column 7")

    def test_context(self):
        reporter = ErrorReporter('{\n  "a": ?\n}')
        error = reporter.create_token_error("Unexpected character '?'", Position(2, 8))

        self.assertIsInstance(error, TokenStreamError)
        self.assertEqual(error.context.line_text, '  "a": ?')
        self.assertEqual(error.context.column_indicator, "       ^")
        self.assertIn("Context:", str(error))

    def test_position_outside_text(self):
        context = ErrorReporter("x").create_context(Position(5, 1))
        self.assertEqual(context.line_text, "")
        self.assertEqual(context.column_indicator, "^")


if __name__ == "__main__":
    unittest.main()
