# File: tests/test_engine.py
from __future__ import annotations

import asyncio

import pytest
from aiohttp import web

from sitemap_audit.engine import run_audit
from sitemap_audit.exceptions import NoSitemapsError, SitemapFetchError

from conftest import RecordingProgress, fast_config


def site_app(base_holder: dict) -> web.Application:
    app = web.Application()

    async def index(_):
        base = base_holder["base"]
        return web.Response(
            text=(
                '<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
                f"<sitemap><loc>{base}/one.xml</loc></sitemap>"
                f"<sitemap><loc>{base}/two.xml</loc></sitemap>"
                "</sitemapindex>"
            ),
            content_type="application/xml",
        )

    def leaf(path: str):
        async def handler(_):
            return web.Response(
                text=f"<urlset><url><loc>{base_holder['base']}{path}</loc></url></urlset>",
                content_type="application/xml",
            )
        return handler

    async def empty_index(_):
        return web.Response(text="<sitemapindex/>", content_type="application/xml")

    async def page(_):
        return web.Response(text="ok")

    app.router.add_get("/index.xml", index)
    app.router.add_get("/empty-index.xml", empty_index)
    app.router.add_get("/one.xml", leaf("/page-one"))
    app.router.add_get("/two.xml", leaf("/page-two"))
    app.router.add_get("/page-one", page)
    app.router.add_get("/page-two", page)
    return app


@pytest.mark.asyncio()
async def test_index_with_two_documents_end_to_end(serve):
    holder: dict = {}
    base = await serve(site_app(holder))
    holder["base"] = base
    sinks: list[RecordingProgress] = []

    def progress_factory(_document):
        sinks.append(RecordingProgress())
        return sinks[-1]

    reports = await run_audit(fast_config(concurrency=2), f"{base}/index.xml", progress_factory)

    assert [r.document.name for r in reports] == [f"{base}/one.xml", f"{base}/two.xml"]
    assert [[(c.url, c.status_code, c.error) for c in r.results] for r in reports] == [
        [(f"{base}/page-one", 200, None)],
        [(f"{base}/page-two", 200, None)],
    ]
    assert sum(len(s.checked) for s in sinks) == 2
    assert all(s.retries == [] for s in sinks)


@pytest.mark.asyncio()
async def test_empty_document_set_is_fatal(serve):
    holder: dict = {}
    base = await serve(site_app(holder))
    holder["base"] = base

    with pytest.raises(NoSitemapsError, match="empty-index.xml"):
        await run_audit(fast_config(), f"{base}/empty-index.xml")


@pytest.mark.asyncio()
async def test_unreachable_root_is_fatal(serve):
    holder: dict = {}
    base = await serve(site_app(holder))
    holder["base"] = base

    with pytest.raises(SitemapFetchError):
        await run_audit(fast_config(), f"{base}/missing.xml")


@pytest.mark.asyncio()
async def test_documents_callback_sees_loaded_tree(serve):
    holder: dict = {}
    base = await serve(site_app(holder))
    holder["base"] = base
    announced = []

    await run_audit(fast_config(), f"{base}/index.xml", on_documents=announced.append)

    assert [len(docs) for docs in announced] == [2]


@pytest.mark.asyncio()
async def test_slow_sub_sitemaps_all_load_with_single_connection(serve):
    holder: dict = {}
    app = web.Application()
    names = [f"s{i}" for i in range(4)]

    async def index(_):
        locs = "".join(f"<sitemap><loc>{holder['base']}/{n}.xml</loc></sitemap>" for n in names)
        return web.Response(text=f"<sitemapindex>{locs}</sitemapindex>", content_type="application/xml")

    async def leaf(request):
        await asyncio.sleep(0.6)
        loc = f"{holder['base']}/page-{request.match_info['name']}"
        return web.Response(text=f"<urlset><url><loc>{loc}</loc></url></urlset>", content_type="application/xml")

    async def page(_):
        return web.Response(text="ok")

    app.router.add_get("/index.xml", index)
    app.router.add_get("/{name}.xml", leaf)
    app.router.add_get("/page-{name}", page)
    base = await serve(app)
    holder["base"] = base

    reports = await run_audit(fast_config(concurrency=1, timeout=1.0), f"{base}/index.xml")

    assert [r.document.name for r in reports] == [f"{base}/{n}.xml" for n in names]
    assert all(r.results[0].status_code == 200 for r in reports)
