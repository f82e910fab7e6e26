"""routes package: central blueprint registration"""


def register_blueprints(app):
    from routes.auth import auth_bp
    from routes.public import public_bp
    from routes.admin import admin_bp
    from routes.catalog_admin import catalog_admin_bp
    from routes.dashboard import dashboard_bp
    from routes.alliances import alliances_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(public_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(catalog_admin_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(alliances_bp)
