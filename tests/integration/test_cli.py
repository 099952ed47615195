"""
Integration tests for the command-line entry point.
"""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr

from jsonlens.__main__ import _cli


class TestCli(unittest.TestCase):
    """Test _cli exit codes and output."""

    def _run(self, argv, text=""):
        stdout = io.StringIO()
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            code = _cli(argv, stdin=io.StringIO(text), stdout=stdout)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_text_output(self):
        code, out, _ = self._run([], '{"a":{}}')
        self.assertEqual(code, 0)
        self.assertEqual(out, '1  {\n2    "a": {}\n3  }\n')

    def test_html_output(self):
        code, out, _ = self._run(["--html"], "cb([1]);")
        self.assertEqual(code, 0)
        self.assertIn('id="jsonpOpener"', out)

    def test_table(self):
        code, out, _ = self._run(["--table"], '[{"a": 1}]')
        self.assertEqual(code, 0)
        self.assertEqual(out, "  | a\n0 | 1\n")

    def test_table_of_object(self):
        code, _, err = self._run(["--table"], '{"a": 1}')
        self.assertEqual(code, 1)
        self.assertIn("JSON is not an Array", err)

    def test_not_json(self):
        code, out, err = self._run([], "hello")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Not JSON: no JSON start found", err)

    def test_no_jsonp(self):
        code, _, err = self._run(["--no-jsonp"], "cb([1])")
        self.assertEqual(code, 1)
        self.assertIn("not valid JSON", err)

    def test_lone_surrogate_is_printed_escaped(self):
        code, out, _ = self._run([], '{"a": "\\ud800"}')
        self.assertEqual(code, 0)
        self.assertEqual(out, '1  {\n2    "a": "\\ud800"\n3  }\n')
        out.encode("utf-8")  # Should not raise

    def test_file_argument(self):
        with tempfile.NamedTemporaryFile(
            "w", suffix=".json", delete=False, encoding="utf-8"
        ) as handle:
            handle.write("[true]")
        try:
            code, out, _ = self._run([handle.name])
        finally:
            os.unlink(handle.name)
        self.assertEqual(code, 0)
        self.assertEqual(out, "1  [\n2    true\n3  ]\n")


if __name__ == "__main__":
    unittest.main()
