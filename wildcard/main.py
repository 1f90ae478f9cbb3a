"""
ASGI entry point.

    uvicorn wildcard.main:fastapi_app --port 3000
"""

from wildcard.core.app import WildCard

app = WildCard()
fastapi_app = app.asgi

if __name__ == "__main__":
    app.run()
