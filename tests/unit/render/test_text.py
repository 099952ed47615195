"""
Test cases for plain-text serialisation.
"""

import unittest

from jsonlens.core.builder import build
from jsonlens.render.text import render_document_text, render_grid_text
from jsonlens.table.synthesizer import synthesize


class TestDocumentText(unittest.TestCase):
    """Test render_document_text."""

    def test_pruned_object(self):
        self.assertEqual(
            render_document_text(build('{"a":{}}')),
            '1  {\n2    "a": {}\n3  }',
        )

    def test_nested_array(self):
        expected = "\n".join([
            "1  [",
            "2    1,",
            "3    {",
            '4      "b": null',
            "5    }",
            "6  ]",
        ])
        self.assertEqual(render_document_text(build('[1, {"b": null}]')), expected)

    def test_jsonp(self):
        expected = "\n".join([
            "1  cb(",
            "2  {",
            '3    "x": "http://a"',
            "4  }",
            "5  )",
        ])
        self.assertEqual(
            render_document_text(build('{"x": "http://a"}', wrapper_name="cb")), expected
        )

    def test_wide_gutter(self):
        lines = render_document_text(build("[" + ", ".join(["0"] * 10) + "]")).split("\n")
        self.assertEqual(lines[0], " 1  [")
        self.assertEqual(lines[-1], "12  ]")


class TestGridText(unittest.TestCase):
    def test_columns_are_aligned(self):
        text = render_grid_text(synthesize([{"name": "a", "n": 1}, {"n": 22}, 3]))
        self.assertEqual(
            text.split("\n"),
            [
                "  | name | n",
                "0 | a    | 1",
                "1 | —    | 22",
                "2 | Unexpected value",
            ],
        )


if __name__ == "__main__":
    unittest.main()
