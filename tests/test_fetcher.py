"""Tests for the page fetcher against an in-process server."""

import asyncio

import pytest
from aiohttp import test_utils, web

from siteaudit.core.exceptions import FetchError
from siteaudit.core.fetcher import FetchedPage, fetch_page


def make_app() -> web.Application:
    async def home(request):
        return web.Response(
            text="<html><head><title>Home</title></head></html>",
            content_type="text/html",
            headers={"X-Frame-Options": "DENY", "Cache-Control": "no-cache"},
        )

    async def missing(request):
        return web.Response(status=404, text="not here")

    async def moved(request):
        raise web.HTTPFound("/")

    async def slow(request):
        await asyncio.sleep(1)
        return web.Response(text="late")

    async def echo_agent(request):
        return web.Response(text=request.headers.get("User-Agent", ""))

    app = web.Application()
    app.router.add_get("/", home)
    app.router.add_get("/missing", missing)
    app.router.add_get("/moved", moved)
    app.router.add_get("/slow", slow)
    app.router.add_get("/agent", echo_agent)
    return app


class TestFetchPage:
    """Tests for fetch_page."""

    @pytest.mark.asyncio
    async def test_reads_body_and_lowercases_headers(self):
        """Test a successful fetch."""
        async with test_utils.TestServer(make_app()) as server:
            page = await fetch_page(str(server.make_url("/")), timeout=5)

        assert page.status == 200
        assert b"<title>Home</title>" in page.body
        assert page.headers["x-frame-options"] == "DENY"
        assert page.header("Cache-Control") == "no-cache"
        assert page.header("content-encoding") == ""
        assert page.elapsed_ms >= 0
        assert page.soup().title.get_text() == "Home"

    @pytest.mark.asyncio
    async def test_follows_redirects(self):
        """Test that redirects are followed to the final page."""
        async with test_utils.TestServer(make_app()) as server:
            page = await fetch_page(str(server.make_url("/moved")), timeout=5)

        assert page.status == 200
        assert page.url.endswith("/")

    @pytest.mark.asyncio
    async def test_sends_user_agent(self):
        """Test the configured user agent is sent."""
        async with test_utils.TestServer(make_app()) as server:
            page = await fetch_page(str(server.make_url("/agent")), timeout=5, user_agent="SiteAuditTest/1.0")

        assert page.text == "SiteAuditTest/1.0"

    @pytest.mark.asyncio
    async def test_non_2xx_is_a_fetch_error(self):
        """Test that error statuses raise FetchError."""
        async with test_utils.TestServer(make_app()) as server:
            with pytest.raises(FetchError, match="Request failed with status code 404"):
                await fetch_page(str(server.make_url("/missing")), timeout=5)

    @pytest.mark.asyncio
    async def test_timeout_is_a_fetch_error(self):
        """Test that exceeding the timeout raises FetchError."""
        async with test_utils.TestServer(make_app()) as server:
            with pytest.raises(FetchError, match="timed out"):
                await fetch_page(str(server.make_url("/slow")), timeout=0.1)

    @pytest.mark.asyncio
    async def test_connection_refused_is_a_fetch_error(self):
        """Test that transport failures raise FetchError."""
        port = test_utils.unused_port()
        with pytest.raises(FetchError):
            await fetch_page(f"http://127.0.0.1:{port}/", timeout=5)


class TestFetchedPage:
    """Tests for FetchedPage helpers."""

    def test_unknown_charset_falls_back_to_utf8(self):
        """Test decoding with a bogus charset."""
        page = FetchedPage(url="https://example.com/", body="café".encode("utf-8"), charset="no-such-codec")
        assert page.text == "café"
