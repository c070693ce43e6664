# seed_runners.py
from dotenv import load_dotenv

load_dotenv()

from runcomp import create_app
from runcomp.extensions import db
from runcomp.models import User, TEAM_NAMES

app = create_app()

def main(num_runners=50):
    with app.app_context():
        db.create_all()

        existing = User.query.count()
        print(f"Existing runners: {existing}")

        # Alternate teams so both sides get the same headcount
        for i in range(num_runners):
            n = existing + i + 1
            u = User(
                email=f"runner{n}@example.com",
                username=f"Test Runner {n}",
                team_name=TEAM_NAMES[n % len(TEAM_NAMES)],
            )
            db.session.add(u)

        db.session.commit()
        total = User.query.count()
        print(f"Now have {total} runners in the DB.")

if __name__ == "__main__":
    main()
