import re

import pytest

from snowdrift.engine import LinkEngine
from snowdrift.utils import ShortcodeCodec
from snowdrift.utils.config import SnowdriftConfig
from snowdrift.dao.memory import LinkMemoryDAO


@pytest.fixture(autouse=True)
def _not_local(monkeypatch):
    """Handlers answer 500 instead of re-raising outside local runs."""
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)


@pytest.fixture
def config():
    return SnowdriftConfig(
        url_prefix='https://sn.ow/',
        allowed_origins=re.compile(r'https://(www\.)?example\.com'),
        root_redirect='https://example.com/home',
    )


@pytest.fixture
def engine():
    return LinkEngine(LinkMemoryDAO(), ShortcodeCodec(salt='handler_test'))


@pytest.fixture
def context():
    return object()
