"""Run the Dayflow JSON API (``python app.py``) or expose ``app`` to a WSGI server."""
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent
for path in (REPO_ROOT, REPO_ROOT / "src" / "dayflow"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dayflow.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=app.config["DEBUG"])
