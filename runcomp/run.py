from dotenv import load_dotenv

load_dotenv()

from runcomp import create_app
from runcomp.extensions import db
from runcomp.routes import register_blueprints

api = create_app()

# Register all Blueprints (auth, runs, leaderboard, etc.)
register_blueprints(api)

def init_db():
    """Ensure DB tables exist."""
    db.create_all()

# Run DB bootstrap once at startup
with api.app_context():
    init_db()

if __name__ == "__main__":
    api.run(debug=True)
