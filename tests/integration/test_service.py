"""
Integration tests for the request/message flow between a host and the
formatter service.
"""

import unittest

from jsonlens.security.exceptions import TokenStreamError
from jsonlens.service import (
    FormatterService,
    Message,
    MessageKind,
    Request,
    RequestKind,
)


class RecordingPort:
    """Port that records what the service sends."""

    def __init__(self):
        self.messages = []
        self.disconnected = False

    def post_message(self, message):
        self.messages.append(message)

    def disconnect(self):
        self.disconnected = True

    @property
    def kinds(self):
        return [message.kind for message in self.messages]


class TestFormatterService(unittest.IsolatedAsyncioTestCase):
    """Test FormatterService.handle."""

    def setUp(self):
        self.service = FormatterService()
        self.port = RecordingPort()

    async def test_render_formatted(self):
        await self.service.handle(
            Request(RequestKind.RENDER_FORMATTED, 'cb({"a": [1, 2]});'), self.port
        )

        self.assertEqual(self.port.kinds, [MessageKind.FORMATTING, MessageKind.FORMATTED])
        self.assertEqual(self.port.messages[0].payload, (False,))
        html, text = self.port.messages[1].payload
        self.assertIn('<div id="jsonpOpener" line-number="1">cb(</div>', html)
        self.assertEqual(text, '{"a": [1, 2]}')
        self.assertFalse(self.port.disconnected)

    async def test_formatting_reports_arrays(self):
        await self.service.handle(Request(RequestKind.RENDER_FORMATTED, "[1]"), self.port)
        self.assertEqual(self.port.messages[0].to_list(), ["FORMATTING", True])

    async def test_not_json(self):
        await self.service.handle(Request(RequestKind.RENDER_FORMATTED, "{}"), self.port)

        self.assertEqual(
            self.port.messages,
            [Message(MessageKind.NOT_JSON, ("empty object or array",))],
        )
        self.assertTrue(self.port.disconnected)

    async def test_deep_nesting_is_not_json(self):
        """Payloads nested past the depth limit are rejected before FORMATTING."""
        text = "[" * 600 + "1" + "]" * 600
        await self.service.handle(Request(RequestKind.RENDER_FORMATTED, text), self.port)

        self.assertEqual(
            self.port.messages,
            [Message(MessageKind.NOT_JSON, ("nested too deeply",))],
        )
        self.assertTrue(self.port.disconnected)

    async def test_render_table(self):
        await self.service.handle(
            Request(RequestKind.RENDER_TABLE, '[{"a": 1}, {"b": 2}]'), self.port
        )

        self.assertEqual(
            self.port.kinds, [MessageKind.FORMATTING_TABLE, MessageKind.FORMATTED_TABLE]
        )
        (html,) = self.port.messages[1].payload
        self.assertIn('<th class="key">b</th>', html)

    async def test_table_of_object(self):
        await self.service.handle(Request(RequestKind.RENDER_TABLE, '{"a": 1}'), self.port)
        self.assertEqual(
            self.port.messages[1].to_list(),
            ["FORMATTED TABLE", "<div>JSON is not an Array</div>"],
        )

    async def test_build_failure_propagates(self):
        """A build failure after extraction is not reported as NOT_JSON."""
        service = FormatterService()

        async def broken_render(extracted, port):
            raise TokenStreamError("Unexpected end of input: unclosed container")

        service.render_formatted = broken_render
        with self.assertRaises(TokenStreamError):
            await service.handle(Request(RequestKind.RENDER_FORMATTED, "[1]"), self.port)
        self.assertNotIn(MessageKind.NOT_JSON, self.port.kinds)


class TestRequest(unittest.TestCase):
    def test_from_message(self):
        request = Request.from_message({"type": "RENDER TABLE", "text": "[1]"})
        self.assertEqual(request, Request(RequestKind.RENDER_TABLE, "[1]"))

    def test_unsupported(self):
        with self.assertRaises(ValueError):
            Request.from_message({"type": "SHOW"})
        with self.assertRaises(ValueError):
            Request.from_message({})


if __name__ == "__main__":
    unittest.main()
