"""
Shared fixtures: a fake Harvest API behind httpx.MockTransport.
"""

import json
from datetime import date
from functools import partial

import httpx
import pytest

from harvest_mcp.api.client import HarvestClient
from harvest_mcp.settings import Credentials
from harvest_mcp.tools.dispatcher import ToolDispatcher


# Wednesday
TODAY = date(2026, 2, 4)


class FakeHarvest:
    """
    Records requests and answers from a route table.

    routes maps (method, path) to (status, json_body).
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, object]] = {}
        self.requests: list[httpx.Request] = []
        self.credentials: list[Credentials] = []

    def add(self, method: str, path: str, body=None, status: int = 200):
        self.routes[(method, "/v2" + path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get((request.method, request.url.path), (404, {"message": "Not found"}))
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})

    def client_factory(self, credentials: Credentials) -> HarvestClient:
        self.credentials.append(credentials)
        return HarvestClient(credentials, transport=httpx.MockTransport(self.handler))

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last.content)


@pytest.fixture
def harvest():
    return FakeHarvest()


@pytest.fixture
def ambient():
    return Credentials(token="env-token", account_id="env-account")


@pytest.fixture
def dispatcher(harvest, ambient):
    return ToolDispatcher(ambient, client_factory=harvest.client_factory, clock=lambda: TODAY)


@pytest.fixture
def make_dispatcher(harvest):
    return partial(ToolDispatcher, client_factory=harvest.client_factory, clock=lambda: TODAY)
