import logging
import sys
from typing import AsyncGenerator, TypeVar

import pytest
from pydiction import Matcher

exclude = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "taskName",
}


@pytest.fixture(autouse=True)
def add_log(caplog):
    class CustomFormatter(logging.Formatter):
        def format(self, record):
            formatted_record = record.getMessage()

            for i in record.__dict__:
                if i not in exclude:
                    formatted_record += f"\n{i}=\n{record.__dict__[i]}"

            return formatted_record

    formatter = CustomFormatter()
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)
    logger = logging.getLogger("pydocuments")
    logger.addHandler(handler)
    with caplog.at_level(logging.DEBUG, "pydocuments"):
        yield
    logger.removeHandler(handler)


T = TypeVar("T")

AsyncFixture = AsyncGenerator[T, None]


@pytest.fixture
def matcher():
    return Matcher()


@pytest.fixture
def sqlite_dsn(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'documents.db'}"
