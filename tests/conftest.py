"""Shared fixtures: sample documents, parsed trees and a fake HTTP session."""

import json
from pathlib import Path

import pytest
import requests

from datasets import DEFAULT_REGISTRY
from hierarchy import parse_tree

FIXTURES = Path(__file__).parent / "fixtures"


def _doc(name):
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture
def movies_doc():
    return _doc("movies_sample.json")


@pytest.fixture
def videogames_doc():
    return _doc("videogames_sample.json")


@pytest.fixture
def movies_tree(movies_doc):
    return parse_tree(movies_doc)


@pytest.fixture
def videogames_tree(videogames_doc):
    return parse_tree(videogames_doc)


@pytest.fixture
def registry():
    return DEFAULT_REGISTRY


class FakeResponse:
    def __init__(self, payload=None, status=200, body=None):
        self.payload = payload
        self.status_code = status
        self.body = body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=None)

    def json(self):
        if self.body is not None:
            return json.loads(self.body)
        return self.payload


class FakeSession:
    """Serves canned responses by URL; records every GET."""

    def __init__(self, routes=None, on_get=None):
        self.routes = routes or {}
        self.calls = []
        self.on_get = on_get

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.on_get is not None:
            self.on_get(url)
        resp = self.routes.get(url)
        if resp is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(resp, Exception):
            raise resp
        return resp


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse
