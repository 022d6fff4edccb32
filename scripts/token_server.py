from __future__ import annotations

import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "dayflow"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dayflow.main import create_token_app


def main() -> None:
    app = create_token_app()
    app.run(host="0.0.0.0", port=int(os.getenv("TOKEN_PORT", "3000")))


if __name__ == "__main__":
    main()
