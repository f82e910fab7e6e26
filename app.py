import os
from flask import Flask, render_template, jsonify
from dotenv import load_dotenv
from flask_wtf.csrf import CSRFProtect
from flask_migrate import Migrate
from models import db
from extensions import limiter
from werkzeug.middleware.proxy_fix import ProxyFix

# load .env before reading any config
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(BASE_DIR, '.env'), override=True)

from config import config_by_name

app = Flask(__name__)
# trust one proxy hop for scheme/host/client address
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

env_name = os.environ.get('FLASK_ENV', 'production')
app_config = config_by_name[env_name]()
app.config.from_object(app_config)

LOG_DIR = os.path.join(BASE_DIR, 'logs')
if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR)

from logging.config import dictConfig
dictConfig(app_config.get_logging_config(LOG_DIR))

db.init_app(app)
migrate = Migrate(app, db)
csrf = CSRFProtect(app)
limiter.init_app(app)

UPLOAD_DIR = os.path.join(BASE_DIR, 'uploads')
if not os.path.exists(UPLOAD_DIR):
    os.makedirs(UPLOAD_DIR)

from routes import register_blueprints
register_blueprints(app)

@app.route('/health')
def health():
    try:
        db.session.execute(db.text('SELECT 1'))
        return jsonify({"status": "healthy", "database": "connected"}), 200
    except Exception as e:
        return jsonify({"status": "unhealthy", "database": str(e)}), 503

@app.after_request
def set_security_headers(response):
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    return response


@app.errorhandler(404)
def page_not_found(e):
    return render_template('error.html', error_code="404", error_message="Page not found", error_description="The page you requested does not exist or has moved."), 404

@app.errorhandler(500)
def internal_server_error(e):
    import logging
    logging.getLogger(__name__).exception("500 Internal Server Error: %s", e)
    return render_template('error.html', error_code="500", error_message="Internal server error", error_description="Please try again shortly. Contact us if the problem persists."), 500

# ── admin navigation context ──
@app.context_processor
def inject_nav_context():
    from flask import request as req

    CATEGORY_MAP = {
        'overview': ['dashboard.admin_dashboard'],
        'leads': [
            'admin.inquiries', 'admin.inquiry_status_form',
        ],
        'catalog': ['catalog_admin.admin_products'],
        'partners': ['alliances.admin_alliances'],
    }
    PREFIX_MAP = {
        'dashboard.': 'overview',
        'admin.': 'leads',
        'catalog_admin.': 'catalog',
    }

    ep = req.endpoint or ''
    active_cat = ''
    for cat, endpoints in CATEGORY_MAP.items():
        if ep in endpoints:
            active_cat = cat
            break
    if not active_cat:
        for prefix, cat in PREFIX_MAP.items():
            if ep.startswith(prefix):
                active_cat = cat
                break

    return dict(active_cat=active_cat, current_ep=ep)


if __name__ == '__main__':
    use_debug = os.environ.get('FLASK_DEBUG', '0') == '1'
    app.run(host='127.0.0.1', port=5000, debug=use_debug)
