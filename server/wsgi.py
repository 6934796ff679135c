# server/wsgi.py

import os
from launcher import create_app
from launcher.config import get_config

env = os.environ.get("FLASK_ENV", "production")
app = create_app(get_config(env))

if __name__ == "__main__":
    app.run()
