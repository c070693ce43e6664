from .index import index_bp
from .auth import auth_bp
from .runs import runs_bp
from .leaderboard import leaderboard_bp
from .users import users_bp

def register_blueprints(app):
    app.register_blueprint(index_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(runs_bp)
    app.register_blueprint(leaderboard_bp)
    app.register_blueprint(users_bp)
