# Overview: Flask extension instances shared by models, services and the CLI.

from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

# Bound to the app in create_app
db = SQLAlchemy()
migrate = Migrate(compare_type=True)
