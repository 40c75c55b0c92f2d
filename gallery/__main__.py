from __future__ import annotations

import os

from . import create_app


def main() -> None:
    app = create_app()
    port = int(os.environ.get("PORT", "3000"))
    app.logger.info("Server running on http://localhost:%d", port)
    app.run(host=os.environ.get("HOST", "127.0.0.1"), port=port)


if __name__ == "__main__":
    main()
