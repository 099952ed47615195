"""
Test cases for comment removal around JSONP calls.
"""

import unittest

from jsonlens.preprocessing.handlers import CommentHandler


class TestCommentHandler(unittest.TestCase):
    """Test CommentHandler.remove_comments."""

    def test_line_comment_keeps_newline(self):
        self.assertEqual(CommentHandler.remove_comments("a // note\nb"), "a \nb")

    def test_block_comment_becomes_space(self):
        self.assertEqual(CommentHandler.remove_comments("a/* x */b"), "a b")

    def test_unterminated_block_comment(self):
        self.assertEqual(CommentHandler.remove_comments("; /* open").strip(), ";")

    def test_strings_are_left_alone(self):
        test_cases = [
            '"http://example.com" // c',
            "'/* not a comment */'",
            '"escaped \\" // quote"',
        ]
        expected = [
            '"http://example.com" ',
            "'/* not a comment */'",
            '"escaped \\" // quote"',
        ]
        for text, result in zip(test_cases, expected):
            with self.subTest(text=text):
                self.assertEqual(CommentHandler.remove_comments(text), result)

    def test_no_comments(self):
        self.assertEqual(CommentHandler.remove_comments("cb"), "cb")
        self.assertEqual(CommentHandler.remove_comments(""), "")


if __name__ == "__main__":
    unittest.main()
