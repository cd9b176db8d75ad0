# schedule_proxy.py — невеликий проксі з кешем для розкладу фінальних іспитів
import logging

import requests
from flask import Blueprint, current_app, jsonify, request

from terms import describe_term, term_code_from_fragment

log = logging.getLogger(__name__)

bp = Blueprint('schedule_proxy', __name__)


class UpstreamError(Exception):
    """The schedule API could not be reached or sent something unusable."""


class ScheduleUpstream:
    """Thin wrapper over the registrar's final-examination schedule API."""

    def __init__(self, url, timeout=20, session=None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/json',
            'User-Agent': 'finals-schedule-proxy',
        })

    def fetch(self, params):
        """
        Forward ``params`` upstream and return the normalized body
        ``{'status': <upstream status>, 'data': [...]}``.
        Raises UpstreamError on transport errors, non-2xx answers or a body
        that is not shaped like the schedule payload.
        """
        log.info("Fetching schedule from %s with %s", self.url, params)
        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f'request failed: {e}') from e

        if not 200 <= response.status_code < 300:
            raise UpstreamError(f'upstream answered {response.status_code}')

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError('upstream body is not JSON') from e

        if not isinstance(payload, dict):
            raise UpstreamError(f'unexpected payload type {type(payload).__name__}')

        # data може бути відсутнім або null — віддаємо порожній список
        data = payload.get('data')
        if data is None:
            data = []
        elif not isinstance(data, list):
            raise UpstreamError(f'unexpected data type {type(data).__name__}')

        return {'status': response.status_code, 'data': data}


def cache_key():
    """Full request identity: path plus the query string as sent."""
    if request.query_string:
        return request.path + '?' + request.query_string.decode('latin-1')
    return request.path


def cached_json(body, hit):
    r = jsonify(body)
    r.headers['X-Cache'] = 'HIT' if hit else 'MISS'
    return r


@bp.route('/api/schedule')
def schedule_proxy():
    term_code = request.args.get('term_code', '').strip()
    if not term_code:
        return jsonify({'error': 'Missing term_code parameter'}), 400

    cache = current_app.extensions['response_cache']
    key = cache_key()
    entry = cache.get(key)
    if entry is not None:
        log.debug("Cache hit for %s", key)
        return cached_json(entry.value, hit=True)

    log.debug("Cache miss for %s", key)
    upstream = current_app.extensions['schedule_upstream']
    try:
        body = upstream.fetch(request.args.to_dict(flat=False))
    except UpstreamError as e:
        log.warning("Schedule fetch for term %s failed: %s", term_code, e)
        return jsonify({'error': 'Error fetching data'}), 500

    cache.put(key, body)
    return cached_json(body, hit=False)


@bp.route('/api/term-code')
def term_code():
    term = request.args.get('term', '')
    try:
        code = term_code_from_fragment(term)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    upstream = current_app.extensions['schedule_upstream']
    url = requests.Request('GET', upstream.url, params={'term_code': code}).prepare().url
    return jsonify({
        'term': term.strip(),
        'term_code': code,
        **describe_term(code),
        'schedule_url': url,
    })
