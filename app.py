import os

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from error_handler import error_handler
from routes import api_routes
from scraper_config import get_scraper_config

# create the app
app = Flask(__name__)
app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)

# Keep record fields in declaration order in JSON output
app.json.sort_keys = False
app.json.ensure_ascii = False

app.register_blueprint(api_routes)


@app.route('/health')
@app.route('/healthz')
def health_check():
    """Liveness probe; add diagnostics when EXPOSE_HEALTH_DIAGNOSTICS=true"""
    health_info = {'ok': True}

    if os.getenv('EXPOSE_HEALTH_DIAGNOSTICS', 'false').lower() == 'true':
        health_info['config'] = get_scraper_config().to_dict()
        health_info['errors'] = error_handler.get_error_stats()

    return health_info, 200
