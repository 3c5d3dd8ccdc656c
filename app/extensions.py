# app/extensions.py

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_mail import Mail
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_cors import CORS

db = SQLAlchemy()
migrate = Migrate()
mail = Mail()
cors = CORS()

# Limite general para toda la API (ver RATELIMIT_DEFAULT en Config)
limiter = Limiter(key_func=get_remote_address)
