"""
Package principal de l'application Flask.
"""

from flask import Flask, jsonify, render_template
from config import DevConfig
from .extensions import init_extensions


def create_app(config_class=DevConfig) -> Flask:
    app = Flask(
        __name__,
        instance_relative_config=True,
        template_folder="templates",
        static_folder="static",
    )
    app.config.from_object(config_class)
    init_extensions(app)

    from .middleware.auth_stub import init_auth_stub
    init_auth_stub(app)

    from .web.template_filters import register_template_filters
    register_template_filters(app)

    _register_blueprints(app)
    _register_error_handlers(app)

    app.logger.info("Application Flask initialisée.")

    @app.route("/health")
    def healthcheck():
        return jsonify({"status": "ok"}), 200

    return app


def _register_blueprints(app: Flask) -> None:
    # Web
    from .web.routes_main import main_bp
    from .web.routes_accounts import accounts_bp
    from .web.routes_receptions import receptions_bp
    from .web.routes_livraisons import livraisons_bp
    from .web.routes_stock import stock_bp
    from .web.routes_vehicules import vehicules_bp
    from .web.routes_charges import charges_bp
    from .web.routes_finance import finance_bp
    from .web.routes_statements import statements_bp
    from .web.routes_journal import journal_bp
    from .web.routes_admin import admin_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(accounts_bp, url_prefix="/accounts")
    app.register_blueprint(receptions_bp, url_prefix="/receptions")
    app.register_blueprint(livraisons_bp, url_prefix="/livraisons")
    app.register_blueprint(stock_bp, url_prefix="/stock")
    app.register_blueprint(vehicules_bp, url_prefix="/vehicules")
    app.register_blueprint(charges_bp, url_prefix="/charges")
    app.register_blueprint(finance_bp, url_prefix="/finance")
    app.register_blueprint(statements_bp, url_prefix="/statements")
    app.register_blueprint(journal_bp, url_prefix="/journal")
    app.register_blueprint(admin_bp, url_prefix="/admin")

    # API
    from .api import api_admin_bp, api_accounts_bp

    app.register_blueprint(api_admin_bp, url_prefix="/api/admin")
    app.register_blueprint(api_accounts_bp, url_prefix="/api")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(403)
    def forbidden(error):
        return render_template("errors/403.html"), 403

    @app.errorhandler(404)
    def not_found(error):
        return render_template("errors/404.html"), 404
