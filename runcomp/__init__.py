from flask import Flask
from .config import Config
from .extensions import db
from runcomp.helpers.competition import build_engine


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)

    # Fail fast on a broken competition config instead of on the first request
    app.extensions["run_scoring_engine"] = build_engine(app.config)

    return app
