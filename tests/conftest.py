"""Shared fixtures."""

import json
from typing import Callable

import httpx
import pytest
from loguru import logger


@pytest.fixture
def log_messages():
    """Collect loguru output for assertions."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level}: {message}")
    yield messages
    logger.remove(handler_id)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def json_response(status_code: int, payload) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"Content-Type": "application/json"},
    )


CONTENTFUL_PAYLOAD = {
    "sys": {"type": "Array"},
    "total": 2,
    "skip": 0,
    "limit": 100,
    "items": [
        {
            "sys": {
                "id": "inception",
                "createdAt": "2025-11-01T10:00:00.000Z",
                "updatedAt": "2025-11-02T10:00:00.000Z",
            },
            "fields": {
                "title": "Inception",
                "director": "Christopher Nolan",
                "releaseYear": 2010,
                "genre": "Sci-Fi",
                "rating": 9,
                "description": "A thief who steals corporate secrets through dreams.",
                "poster": [
                    {"sys": {"type": "Link", "linkType": "Asset", "id": "poster-1"}},
                    {"sys": {"type": "Link", "linkType": "Asset", "id": "poster-2"}},
                ],
            },
        },
        {
            "sys": {
                "id": "bare",
                "createdAt": "2025-11-03T10:00:00.000Z",
                "updatedAt": "2025-11-03T10:00:00.000Z",
            },
            "fields": {},
        },
    ],
    "includes": {
        "Asset": [
            {
                "sys": {"id": "poster-1"},
                "fields": {"file": {"url": "//images.ctfassets.net/space/poster-1.jpg"}},
            },
            {
                "sys": {"id": "poster-2"},
                "fields": {"file": {"url": "//images.ctfassets.net/space/poster-2.jpg"}},
            },
        ]
    },
}


@pytest.fixture
def contentful_payload() -> dict:
    return json.loads(json.dumps(CONTENTFUL_PAYLOAD))
