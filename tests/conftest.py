# -*- coding: Utf-8 -*-

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator

import pytest

if TYPE_CHECKING:
    from pyconfigurable import DSL, Settings


################################## fixtures ##################################


@pytest.fixture
def dsl() -> DSL:
    from pyconfigurable import DSL

    return DSL()


@pytest.fixture
def empty_settings() -> Settings:
    from pyconfigurable import Settings

    return Settings()


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """
    Collect the messages emitted by the package through loguru
    """
    from loguru import logger

    messages: list[str] = []

    def sink(message: Any) -> None:
        messages.append(message.record["message"])

    logger.enable("pyconfigurable")
    handler_id = logger.add(sink, level="DEBUG", filter="pyconfigurable")
    try:
        yield messages
    finally:
        logger.remove(handler_id)
        logger.disable("pyconfigurable")
