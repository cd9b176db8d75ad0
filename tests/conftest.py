"""
Shared fixtures: an app wired to a mocked upstream session, a fake clock
for the cache and a mocked chat client for the term suggester. Nothing
here touches the network.
"""
from unittest.mock import MagicMock

import pytest
import requests

from app import create_app
from response_cache import ResponseCache
from schedule_proxy import ScheduleUpstream
from term_suggest import TermSuggester

UPSTREAM_URL = 'https://upstream.test/api/final-examination-schedule'
TTL = 4 * 60 * 60


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def upstream_response(payload=None, status=200, bad_json=False):
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    if bad_json:
        response.json.side_effect = ValueError('Expecting value')
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session():
    s = MagicMock()
    s.headers = {}
    s.get.return_value = upstream_response({'data': []})
    return s


@pytest.fixture
def app(clock, session):
    app = create_app({
        'TESTING': True,
        'SCHEDULE_UPSTREAM_URL': UPSTREAM_URL,
        'CACHE_TTL_SECONDS': TTL,
        'CACHE_MAX_ENTRIES': 512,
        'OPENAI_API_KEY': None,
        'CORS_ORIGINS': '*',
    })
    app.extensions['response_cache'] = ResponseCache(ttl=TTL, max_entries=512, clock=clock)
    app.extensions['schedule_upstream'] = ScheduleUpstream(UPSTREAM_URL, timeout=5, session=session)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def cache(app):
    return app.extensions['response_cache']


@pytest.fixture
def chat_client(app):
    """Mocked OpenAI client wired into a real TermSuggester."""
    client = MagicMock()
    app.extensions['term_suggester'] = TermSuggester(model='test-model', client=client)
    return client
