"""
Development server: `python -m fitness_api`.

Listens on PORT (default 3000). Configuration is picked from APP_ENV by
get_config(); in production serve create_app() from a WSGI server instead.
"""
import logging
import os

from . import create_app

app = create_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", "3000"))
    host = os.getenv("HOST", "0.0.0.0")
    logging.getLogger(__name__).info("Server running on http://%s:%s", host, port)
    app.run(host=host, port=port, debug=app.config.get("DEBUG", False))
