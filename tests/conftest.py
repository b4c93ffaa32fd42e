"""
Pytest configuration and shared fixtures for security_feed tests.

Upstream providers are simulated with an in-process aiohttp application:

    async with TestServer(providers.app()) as server:
        providers.point(config, server)
"""
import asyncio
import json
from typing import Any, Dict, List

import pytest
from aiohttp import web

from security_feed.config import (
    Config,
    IncidentApiConfig,
    StorageConfig,
    TrustScoreApiConfig,
)


# =============================================================================
# Sample Data Helpers
# =============================================================================

def make_exchange_payload(exchange_id: str, rank: int = 1) -> Dict[str, Any]:
    """CoinGecko-style exchange detail body."""
    return {
        "id": exchange_id,
        "name": exchange_id.replace("-", " ").title(),
        "trust_score": 10,
        "trust_score_rank": rank,
        "trade_volume_24h_btc": 12345.67,
        "year_established": 2017,
        "country": "Cayman Islands",
        "url": f"https://www.{exchange_id}.com/",
        "tickers": [],
    }


def make_incident(title: str, **extra: Any) -> Dict[str, Any]:
    return {
        "title": title,
        "entity": "Example Exchange",
        "date": "2026-10-15T08:30:00.000Z",
        **extra,
    }


# =============================================================================
# Fake Providers
# =============================================================================

class FakeProviders:
    """Serves the incident and exchange-info endpoints from one app."""

    def __init__(self):
        self.incident_status = 200
        self.incident_delay = 0.0
        self.incident_body: str = json.dumps([make_incident("Hot wallet breach")])
        self.exchange_statuses: Dict[str, int] = {}
        self.exchange_bodies: Dict[str, str] = {}
        self.incident_requests: List[Dict[str, Any]] = []
        self.exchange_requests: List[str] = []

    async def _incidents(self, request: web.Request) -> web.Response:
        self.incident_requests.append({
            "headers": request.headers.copy(),
            "body": await request.json(),
        })
        if self.incident_delay:
            await asyncio.sleep(self.incident_delay)
        return web.Response(
            status=self.incident_status,
            text=self.incident_body,
            content_type="application/json",
        )

    async def _exchange(self, request: web.Request) -> web.Response:
        exchange_id = request.match_info["exchange_id"]
        self.exchange_requests.append(exchange_id)
        status = self.exchange_statuses.get(exchange_id, 200)
        if status != 200:
            return web.json_response({"error": "not found"}, status=status)
        body = self.exchange_bodies.get(exchange_id)
        if body is not None:
            return web.Response(text=body, content_type="application/json")
        rank = self.exchange_requests.index(exchange_id) + 1
        return web.json_response(make_exchange_payload(exchange_id, rank))

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/cpw/", self._incidents)
        app.router.add_get("/api/v3/exchanges/{exchange_id}", self._exchange)
        return app

    @staticmethod
    def point(config: Config, server) -> Config:
        config.incident_api.url = str(server.make_url("/cpw/"))
        config.trust_score_api.base_url = str(server.make_url("/api/v3"))
        return config


@pytest.fixture
def providers() -> FakeProviders:
    return FakeProviders()


# =============================================================================
# Config Fixtures
# =============================================================================

UNREACHABLE_URL = "http://127.0.0.1:1"


@pytest.fixture
def config(tmp_path) -> Config:
    """Configuration with a test credential, no pacing and a temp data dir."""
    return Config(
        incident_api=IncidentApiConfig(api_key="test_key"),
        trust_score_api=TrustScoreApiConfig(request_delay_ms=0),
        storage=StorageConfig(data_dir=str(tmp_path / "data")),
    )


@pytest.fixture
def unreachable_config(config: Config) -> Config:
    config.incident_api.url = f"{UNREACHABLE_URL}/"
    config.trust_score_api.base_url = f"{UNREACHABLE_URL}/api/v3"
    return config
