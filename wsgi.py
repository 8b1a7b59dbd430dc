"""WSGI entry point for production server."""

import sys

from resume_studio import create_app

# Wrap application creation in a try/except so we can capture full
# traceback in logs during early startup.
try:
    app = create_app()
except Exception:
    import traceback

    print("\nFATAL: Failed to create Flask application during startup:\n", file=sys.stderr)
    traceback.print_exc()
    # Re-raise so the process exits and the server reports the boot failure
    raise

if __name__ == "__main__":
    from config.settings import settings

    settings.display_config()
    app.run(host=settings.host, port=settings.port)
