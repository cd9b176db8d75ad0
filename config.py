# config.py — налаштування з оточення (.env підтягується автоматично)
import os

from dotenv import load_dotenv

DEFAULT_UPSTREAM_URL = 'https://registrar.kfupm.edu.sa/api/final-examination-schedule'

# 4 години: розклад іспитів може змінюватися, тож кеш не вічний
DEFAULT_CACHE_TTL = 4 * 60 * 60
DEFAULT_CACHE_MAX_ENTRIES = 512


def _int_env(name, default, minimum=None):
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}')
    if minimum is not None and value < minimum:
        raise ValueError(f'{name} must be >= {minimum}, got {value}')
    return value


def load_config(overrides=None):
    """Build the app config dict from the process environment.

    ``overrides`` wins over anything found in the environment.
    """
    load_dotenv()
    config = {
        'PORT': _int_env('PORT', 5000),
        'SCHEDULE_UPSTREAM_URL': os.environ.get('SCHEDULE_UPSTREAM_URL', DEFAULT_UPSTREAM_URL),
        'UPSTREAM_TIMEOUT': _int_env('UPSTREAM_TIMEOUT', 20, minimum=1),
        'CACHE_TTL_SECONDS': _int_env('CACHE_TTL_SECONDS', DEFAULT_CACHE_TTL, minimum=0),
        'CACHE_MAX_ENTRIES': _int_env('CACHE_MAX_ENTRIES', DEFAULT_CACHE_MAX_ENTRIES, minimum=0),
        'OPENAI_API_KEY': os.environ.get('OPENAI_API_KEY'),
        'OPENAI_MODEL': os.environ.get('OPENAI_MODEL', 'gpt-4o-mini'),
        'CORS_ORIGINS': os.environ.get('CORS_ORIGINS', '*'),
        'LOG_LEVEL': os.environ.get('LOG_LEVEL', 'INFO').upper(),
    }
    if overrides:
        config.update(overrides)
    return config
