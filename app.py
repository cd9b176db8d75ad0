import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import load_config
from response_cache import ResponseCache
from schedule_proxy import ScheduleUpstream
from schedule_proxy import bp as schedule_bp
from term_suggest import TermSuggester
from term_suggest import bp as suggest_bp

log = logging.getLogger(__name__)


def configure_logging(level):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )


def create_app(overrides=None):
    """
    Build the proxy app. ``overrides`` replaces values loaded from the
    environment (used by tests).
    """
    app = Flask(__name__)
    app.config.update(load_config(overrides))

    # Кеш і клієнти належать застосунку, а не модулю
    app.extensions['response_cache'] = ResponseCache(
        ttl=app.config['CACHE_TTL_SECONDS'],
        max_entries=app.config['CACHE_MAX_ENTRIES'],
    )
    app.extensions['schedule_upstream'] = ScheduleUpstream(
        app.config['SCHEDULE_UPSTREAM_URL'],
        timeout=app.config['UPSTREAM_TIMEOUT'],
    )
    app.extensions['term_suggester'] = TermSuggester(
        api_key=app.config['OPENAI_API_KEY'],
        model=app.config['OPENAI_MODEL'],
    )

    origins = app.config['CORS_ORIGINS']
    if origins != '*':
        origins = [o.strip() for o in origins.split(',') if o.strip()]
    CORS(app, resources={r'/api/*': {'origins': origins}}, send_wildcard=origins == '*')

    app.register_blueprint(schedule_bp)
    app.register_blueprint(suggest_bp)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'error': e.description}), e.code

    log.info("Schedule proxy ready, upstream %s, cache ttl %ss",
             app.config['SCHEDULE_UPSTREAM_URL'], app.config['CACHE_TTL_SECONDS'])
    return app


if __name__ == '__main__':
    config = load_config()
    configure_logging(config['LOG_LEVEL'])
    app = create_app(config)
    app.run(host='0.0.0.0', port=app.config['PORT'])
