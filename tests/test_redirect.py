"""Tests for perch.middleware.redirect — HTTPS redirect handler."""

import pytest

from perch.middleware.redirect import TEMPORARY_REDIRECT, redirect
from perch.routing.route import Routes, handle
from perch.testing import TestClient

to_https = redirect(":8080", ":8443")


class TestTarget:
    @pytest.mark.asyncio
    async def test_localhost_port_is_rewritten(self, make_request) -> None:
        response = await to_https(make_request("/foo", host="localhost:8080"))
        assert response.status == TEMPORARY_REDIRECT == 307
        assert response.header("Location") == "https://localhost:8443/foo"

    @pytest.mark.asyncio
    async def test_query_is_appended(self, make_request) -> None:
        response = await to_https(make_request("/foo", host="localhost:8080", query="a=1"))
        assert response.header("Location") == "https://localhost:8443/foo?a=1"

    @pytest.mark.asyncio
    async def test_no_bare_question_mark(self, make_request) -> None:
        response = await to_https(make_request("/foo", host="localhost:8080", query=""))
        assert not response.header("Location").endswith("?")

    @pytest.mark.asyncio
    async def test_raw_query_is_not_reencoded(self, make_request) -> None:
        response = await to_https(make_request("/s", host="localhost:8080", query="q=a%20b&x"))
        assert response.header("Location") == "https://localhost:8443/s?q=a%20b&x"

    @pytest.mark.parametrize(
        "host",
        ["example.com:8080", "localhost", "localhost:9090", "127.0.0.1:8080"],
    )
    @pytest.mark.asyncio
    async def test_other_hosts_are_kept(self, make_request, host: str) -> None:
        response = await to_https(make_request("/foo", host=host))
        assert response.header("Location") == f"https://{host}/foo"

    @pytest.mark.asyncio
    async def test_get_has_html_body(self, make_request) -> None:
        response = await to_https(make_request("/foo", host="localhost:8080"))
        assert response.text == '<a href="https://localhost:8443/foo">Temporary Redirect</a>.\n'

    @pytest.mark.asyncio
    async def test_post_has_no_body(self, make_request) -> None:
        response = await to_https(make_request("/foo", method="POST", host="localhost:8080"))
        assert response.status == 307
        assert response.text == ""


class TestServedRedirect:
    @pytest.mark.asyncio
    async def test_whole_site_redirect(self) -> None:
        mux = Routes([handle("/", to_https)]).serve()
        async with TestClient(mux, host="localhost:8080") as client:
            response = await client.get("/deep/page?tab=2")
        assert response.status == 307
        assert response.header("location") == "https://localhost:8443/deep/page?tab=2"
