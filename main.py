import os
import sys

from app.main import app  # noqa: F401  (re-exported for "uvicorn main:app")


def run_http(port: int):
    """Run HTTP server"""
    import uvicorn
    print(f"Starting Storefront API on port {port}...")
    uvicorn.run(
        "app.main:app",  # Use string import
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        reload="--reload" in sys.argv,
    )


if __name__ == "__main__":
    run_http(int(os.getenv("PORT", "3000")))
