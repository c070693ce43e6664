from .user import User, TEAM_NAMES
from .run import Run
from .login_code import LoginCode
