import logging

import pytest

import app.main as main
from app.core.logger import setup_logging


class Closable:
    def __init__(self):
        self.closed = False

    async def close(self):
        self.closed = True

    async def dispose(self):
        self.closed = True


@pytest.mark.asyncio
async def test_root_reports_service_and_clinic_clock(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert res.json() == {"service": "ClinicBook", "clinic_timezone": "UTC"}


@pytest.mark.asyncio
async def test_shutdown_releases_token_store_and_database(monkeypatch):
    token_store, engine = Closable(), Closable()
    monkeypatch.setattr(main, "redis_client", token_store)
    monkeypatch.setattr(main, "engine", engine)

    async with main.lifespan(main.app):
        assert not token_store.closed
        assert not engine.closed

    assert token_store.closed
    assert engine.closed


def test_log_level_comes_from_settings():
    logger = setup_logging("debug")
    try:
        assert logger.name == "clinicbook"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
    finally:
        setup_logging("INFO")
