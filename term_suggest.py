# term_suggest.py — підказка поточного семестру через OpenAI
import logging
from datetime import date

import openai
from flask import Blueprint, current_app, jsonify

from schedule_proxy import cache_key
from terms import extract_term_fragment

log = logging.getLogger(__name__)

bp = Blueprint('term_suggest', __name__)

PROMPT = (
    "Today is {today}. KFUPM term codes are three digits: the last two digits "
    "of the academic year's starting year followed by the term number "
    "(1 = first, 2 = second, 3 = summer). For example the first term of "
    "2025-2026 is 251. Reply with the term code that is most likely current."
)


class SuggestionError(Exception):
    """The text service failed or its reply had no 3-digit term."""


class TermSuggester:
    def __init__(self, api_key=None, model='gpt-4o-mini', client=None):
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise SuggestionError('OPENAI_API_KEY is not set')
            self._client = openai.OpenAI(api_key=self.api_key)
        return self._client

    def ask(self, today=None):
        """Return the raw reply text from the chat model."""
        today = today or date.today()
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[{'role': 'user', 'content': PROMPT.format(today=today.isoformat())}],
            )
        except openai.OpenAIError as e:
            raise SuggestionError(f'text service failed: {e}') from e
        try:
            return completion.choices[0].message.content or ''
        except (IndexError, AttributeError) as e:
            raise SuggestionError(f'unexpected reply shape: {e}') from e

    def suggest(self, today=None):
        reply = self.ask(today)
        term = extract_term_fragment(reply)
        if term is None:
            raise SuggestionError(f'no 3-digit term in reply {reply!r}')
        return term


@bp.route('/api/suggest-term')
def suggest_term():
    cache = current_app.extensions['response_cache']
    key = cache_key()
    entry = cache.get(key)
    if entry is not None:
        return jsonify(entry.value)

    suggester = current_app.extensions['term_suggester']
    try:
        term = suggester.suggest()
    except SuggestionError as e:
        log.warning("Term suggestion failed: %s", e)
        return jsonify({'error': 'Could not suggest a term'}), 500

    body = {'term': term}
    cache.put(key, body)
    return jsonify(body)
