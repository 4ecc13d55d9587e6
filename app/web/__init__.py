"""
Package web : blueprints HTML et filtres Jinja.

Les blueprints sont enregistrés par create_app() (app/__init__.py).
"""
