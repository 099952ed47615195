"""
jsonlens demonstration script.
"""

import asyncio

import jsonlens
from jsonlens.service import FormatterService, Request, RequestKind


class PrintingPort:
    """Port that prints each message instead of sending it to a host."""

    def post_message(self, message):
        kind, *payload = message.to_list()
        print(f"  -> {kind} {[str(p)[:60] for p in payload]}")

    def disconnect(self):
        print("  -> (disconnected)")


def main():
    print("jsonlens - JSON/JSONP Viewer Demo")
    print("=" * 40)

    examples = [
        # Plain JSON
        ('{"name": "jsonlens", "homepage": "https://example.com", "tags": []}', "Plain object"),
        # JSONP with a trailing semicolon
        ('callback({"items": [1, 2, {"deep": null}]});', "JSONP call"),
        # Anti-hijacking preamble
        (')]}\',\n[{"id": 1, "ok": true}, {"id": 2}]', "Preamble before the payload"),
        # Not worth rendering
        ("42", "Scalar"),
        ("<html><body>hello</body></html>", "Not JSON"),
    ]

    for i, (text, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {text}")

        try:
            result = jsonlens.extract(text)
        except jsonlens.ExtractionError as e:
            print(f"Not JSON: {e.reason.value}")
            continue

        document = jsonlens.build(result.normalized_text, result.wrapper_name)
        print(jsonlens.render_document_text(document))

    # Table view of an array of objects
    print(f"\n{len(examples) + 1}. Table view")
    grid = jsonlens.synthesize([{"a": 1, "b": "x"}, {"b": "y", "c": [1]}, 5])
    print(jsonlens.render_grid_text(grid))

    # Host message flow
    print(f"\n{len(examples) + 2}. Service messages")
    service = FormatterService()
    for kind, text in [
        (RequestKind.RENDER_FORMATTED, "cb([1, 2])"),
        (RequestKind.RENDER_TABLE, '[{"a": 1}]'),
        (RequestKind.RENDER_FORMATTED, "[]"),
    ]:
        print(f"{kind.value}: {text}")
        asyncio.run(service.handle(Request(kind, text), PrintingPort()))


if __name__ == "__main__":
    main()
