"""
Modal cloud deployment for pagesnap.

Serves the same FastAPI app as `pagesnap serve`:
- GET /health
- GET /screenshot
- GET /v1/screenshot
- GET /v1/info

Deploy with:
    modal deploy src/pagesnap/modal_app.py

RAPIDAPI_PROXY_SECRET and RAPIDAPI_HOST come from the "pagesnap-rapidapi"
Modal secret.
"""

import modal

app = modal.App("pagesnap")

# Image with Chromium for Pyppeteer-based capture
image = (
    modal.Image.debian_slim(python_version="3.12")
    .apt_install(
        # Chromium and its runtime dependencies
        "chromium",
        "libnss3",
        "libatk1.0-0",
        "libatk-bridge2.0-0",
        "libcups2",
        "libdrm2",
        "libxkbcommon0",
        "libxcomposite1",
        "libxdamage1",
        "libxfixes3",
        "libxrandr2",
        "libgbm1",
        "libasound2",
        "libpango-1.0-0",
        "libcairo2",
        "fonts-liberation",
        "fonts-noto-color-emoji",
    )
    .env(
        {
            "PYPPETEER_HOME": "/tmp/pyppeteer",
            "PAGESNAP_CHROMIUM_EXECUTABLE": "/usr/bin/chromium",
        }
    )
    .pip_install(
        "pyppeteer>=1.0.0",
        "fastapi>=0.109.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "click>=8.0",
        "rich>=13.0",
    )
    .add_local_python_source("pagesnap")
)


@app.function(
    image=image,
    secrets=[modal.Secret.from_name("pagesnap-rapidapi")],
    timeout=120,
    memory=2048,
    cpu=2.0,
)
@modal.concurrent(max_inputs=4)
@modal.asgi_app()
def fastapi_app():
    """FastAPI app for the pagesnap API."""
    from pagesnap.config import get_settings
    from pagesnap.server.app import create_app

    settings = get_settings()
    print(f"[API] Starting pagesnap (public endpoint: {settings.enable_public_endpoint})", flush=True)

    return create_app(settings)
