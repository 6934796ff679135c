# server/run.py

import os
from launcher import create_app
from launcher.config import get_config

env = os.environ.get("FLASK_ENV", "development")
app = create_app(get_config(env))

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    host = os.environ.get("HOST", "0.0.0.0")
    debug = env == "development"

    print(f"\n[Launcher] Development server starting...")
    print(f"[Launcher] http://{host}:{port}")
    print(f"[Launcher] Debug: {debug}\n")
    print("Note: For production, use: gunicorn wsgi:app\n")

    app.run(host=host, port=port, debug=debug)
