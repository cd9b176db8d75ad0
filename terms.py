# terms.py — робота з кодами семестрів
import re

TERM_FRAGMENT_RE = re.compile(r'\d{3}')

SEASONS = {'1': 'first', '2': 'second'}


def is_term_fragment(term):
    return bool(term) and len(term) == 3 and term.isdigit()


def term_code_from_fragment(term):
    """'251' -> '202510'."""
    term = (term or '').strip()
    if not is_term_fragment(term):
        raise ValueError('Term code must be 3 digits')
    return '20' + term + '0'


def describe_term(term_code):
    """
    Split a 5+ digit term code into its academic year and season.
    Any term digit other than 1 or 2 is the summer term.
    """
    return {
        'year': term_code[:4],
        'season': SEASONS.get(term_code[4:5], 'summer'),
    }


def extract_term_fragment(text):
    """Return the first 3-digit run found in free text, or None."""
    match = TERM_FRAGMENT_RE.search(text or '')
    return match.group(0) if match else None
