"""
Tests for diagnostics rendering and debug-info embedding.
"""

from collections.abc import Callable

import pytest

from objcache.object_cache import ObjectCacheRuntime, RequestContext
from objcache.object_cache.diagnostics import CacheCounters, DebugRecord, DiagnosticsReporter, _center
from objcache.object_cache.engine import POWERED_BY, REJECT_DISABLED, is_markup


def make_reporter(debug: bool = True, caching: bool = True, records: list[DebugRecord] | None = None):
    return DiagnosticsReporter(
        engine_name="Disk",
        caching=caching,
        reject_reason="" if caching else REJECT_DISABLED,
        debug=debug,
        counters=CacheCounters(total_calls=2, hits=1, misses=1, total_time=0.012345),
        records=records
        if records is not None
        else [
            DebugRecord(id="post_1", group="posts", cached=True, internal=False, data_size=57, elapsed=0.01),
            DebugRecord(id="missing", group="default", cached=False, internal=True, data_size=0, elapsed=0.002345),
        ],
    )


class TestCenter:
    def test_extra_padding_goes_right(self):
        assert _center("cached", 15) == "    cached     "

    def test_even_padding(self):
        assert _center("internal", 14) == "   internal   "

    def test_wider_text_unchanged(self):
        assert _center("persistent", 5) == "persistent"


class TestDebugRecord:
    def test_labels(self):
        record = DebugRecord(id="a", group="b", cached=False, internal=True, data_size=0, elapsed=0.0)

        assert record.status == "not cached"
        assert record.source == "internal"


class TestRenderHtml:
    def test_summary_and_table(self):
        html = make_reporter().render_html()

        assert "<h2>Summary</h2>" in html
        assert "<strong>Engine</strong>: Disk<br />" in html
        assert "<strong>Caching</strong>: enabled<br />" in html
        assert "Reject reason" not in html
        assert "<strong>Total calls</strong>: 2<br />" in html
        assert "<strong>Total time</strong>: 0.0123s" in html
        assert "<td>1</td><td>cached</td><td>persistent</td><td>57</td><td>0.01</td><td>post_1:posts</td>" in html
        assert "<td>not cached</td><td>internal</td>" in html

    def test_reject_reason_when_disabled(self):
        html = make_reporter(caching=False).render_html()

        assert "<strong>Caching</strong>: disabled<br />" in html
        assert f"<strong>Reject reason</strong>: {REJECT_DISABLED}<br />" in html

    def test_without_debug(self):
        html = make_reporter(debug=False).render_html()

        assert html.endswith("<h2>Cache info</h2><p>Enable debug mode.</p>")
        assert "<table" not in html

    def test_ids_are_escaped(self):
        record = DebugRecord(id="<b>", group="g&g", cached=True, internal=True, data_size=1, elapsed=0.0)
        html = make_reporter(records=[record]).render_html()

        assert "&lt;b&gt;:g&amp;g" in html


class TestRenderComment:
    def test_layout(self):
        block = make_reporter().render_comment()
        lines = block.split("\r\n")

        assert lines[0] == "<!-- Object Cache debug info:"
        assert lines[1] == "Engine:             Disk"
        assert lines[2] == "Caching:            enabled"
        assert "Total time:         0.0123" in lines
        assert "Object Cache info:" in lines
        assert lines[-1] == "-->"

        header = lines[lines.index("Object Cache info:") + 1]
        assert header.split(" | ") == [
            "    #",
            "    Status     ",
            "    Source     ",
            "Data size (b)",
            "Query time (s)",
            "ID:Group",
        ]

        first = lines[lines.index("Object Cache info:") + 2].split(" | ")
        assert first[0] == "    1"
        assert first[1] == "    cached     "
        assert first[2] == "  persistent   "
        assert first[3] == "           57"
        assert first[4] == "          0.01"
        assert first[5] == "post_1:posts"

    def test_reject_reason_row(self):
        block = make_reporter(caching=False).render_comment()
        assert f"Reject reason:      {REJECT_DISABLED}" in block

    @pytest.mark.parametrize(
        "id,label",
        [("a--b", "a- -b:g"), ("a---b", "a- - -b:g"), ("x----", "x- - - -:g")],
    )
    def test_double_dash_cannot_close_comment(self, id, label):
        record = DebugRecord(id=id, group="g", cached=True, internal=True, data_size=1, elapsed=0.0)
        block = make_reporter(records=[record]).render_comment()
        body = block[len("<!--") : -len("-->")]

        assert label in block
        assert "--" not in body


class TestToDict:
    def test_with_debug(self):
        report = make_reporter().to_dict()

        assert report["engine"] == "Disk"
        assert report["caching"] is True
        assert report["reject_reason"] is None
        assert report["total_time"] == 0.0123
        assert report["records"][0]["id"] == "post_1"

    def test_without_debug(self):
        report = make_reporter(debug=False, caching=False).to_dict()

        assert report["reject_reason"] == REJECT_DISABLED
        assert report["records"] == []


class TestEmbedding:
    @pytest.mark.parametrize(
        "output,expected",
        [
            ("<html><body></body></html>", True),
            ('<?xml version="1.0"?><rss/>', True),
            ("<!DOCTYPE HTML><HTML>", True),
            ('{"json": true}', False),
            ("", False),
        ],
    )
    def test_is_markup(self, output, expected):
        assert is_markup(output) is expected

    async def test_appends_block_to_html(self, make_runtime: Callable[..., ObjectCacheRuntime]):
        cache = make_runtime(debug=True).new_request()
        await cache.get("k")

        output = cache.embed_debug_info("<html></html>")

        assert output.startswith("<html></html>\r\n\r\n<!-- Object Cache debug info:")
        assert output.endswith("-->")

    async def test_leaves_non_markup_alone(self, make_runtime: Callable[..., ObjectCacheRuntime]):
        cache = make_runtime(debug=True).new_request()
        assert cache.embed_debug_info('{"a": 1}') == '{"a": 1}'
        assert cache.embed_debug_info("") == ""

    @pytest.mark.parametrize(
        "overrides,context",
        [
            ({"debug": False}, RequestContext()),
            ({"debug": True, "enabled": False}, RequestContext()),
            ({"debug": True}, RequestContext(embeddable=False)),
            ({"debug": True}, RequestContext(user_agent=f"Mozilla/5.0 {POWERED_BY.upper()}/1.0")),
        ],
    )
    def test_embedding_refused(self, make_runtime: Callable[..., ObjectCacheRuntime], overrides, context):
        cache = make_runtime(**overrides).new_request(context)

        assert cache.can_embed() is False
        assert cache.embed_debug_info("<html></html>") == "<html></html>"

    async def test_stats_page(self, make_runtime: Callable[..., ObjectCacheRuntime]):
        cache = make_runtime(enabled=False).new_request()
        await cache.get("k")

        stats = cache.stats()

        assert "<strong>Engine</strong>: Memory<br />" in stats
        assert f"<strong>Reject reason</strong>: {REJECT_DISABLED}<br />" in stats
        assert "<p>Enable debug mode.</p>" in stats
