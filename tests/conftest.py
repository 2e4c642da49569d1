import asyncio
import io

import pytest
from aiohttp import web

from titlescan.logger import plain_logger
from titlescan.output_writer import OutputWriter


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def logger(log_stream):
    return plain_logger(log_stream)


@pytest.fixture
def out_stream():
    return io.StringIO()


@pytest.fixture
def output_writer(out_stream):
    return OutputWriter(out_stream)


async def _title_page(request):
    return web.Response(text="<html><head><title>Example</title></head><body></body></html>",
                        content_type="text/html")


async def _untitled_page(request):
    return web.Response(text="<html><body><p>no title here</p></body></html>", content_type="text/html")


async def _missing_page(request):
    return web.Response(status=404, text="<html><head><title>Not Found</title></head></html>",
                        content_type="text/html")


async def _slow_page(request):
    await asyncio.sleep(1.5)
    return web.Response(text="<title>Too Late</title>", content_type="text/html")


async def _stalled_body(request):
    response = web.StreamResponse(headers={"Content-Type": "text/html"})
    response.content_length = 1000
    await response.prepare(request)
    await response.write(b"<title>partial")
    await asyncio.sleep(1.5)
    return response


async def _dropped_body(request):
    response = web.StreamResponse(headers={"Content-Type": "text/html"})
    response.content_length = 1000
    await response.prepare(request)
    await response.write(b"<title>partial")
    request.transport.close()
    return response


@pytest.fixture
async def site(aiohttp_server):
    app = web.Application()
    app.router.add_get("/", _title_page)
    app.router.add_get("/untitled", _untitled_page)
    app.router.add_get("/missing", _missing_page)
    app.router.add_get("/slow", _slow_page)
    app.router.add_get("/stalled-body", _stalled_body)
    app.router.add_get("/dropped-body", _dropped_body)
    return await aiohttp_server(app)
