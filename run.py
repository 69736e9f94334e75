"""Entry point: launches the Streamlit app and opens the browser."""

import argparse
import sys
import threading
import time
import webbrowser
from pathlib import Path

import requests


DEFAULT_PORT = 8501


def _wait_and_open_browser(url: str) -> None:
    """Wait for the Streamlit server to become ready, then open the browser."""
    for _ in range(30):  # up to 30 seconds
        try:
            resp = requests.get(url, timeout=2)
            if resp.status_code == 200:
                webbrowser.open(url)
                return
        except requests.RequestException:
            pass
        time.sleep(1)


def main() -> None:
    parser = argparse.ArgumentParser(description="Browse a GitHub repository's Markdown docs.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--no-browser", action="store_true", help="Do not open a browser tab."
    )
    args = parser.parse_args()

    src_dir = Path(__file__).resolve().parent / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))

    from streamlit.web import bootstrap

    app_path = str(src_dir / "MDPreview" / "app.py")

    if not args.no_browser:
        url = f"http://localhost:{args.port}"
        threading.Thread(target=_wait_and_open_browser, args=(url,), daemon=True).start()

    bootstrap.run(
        app_path,
        is_hello=False,
        args=[],
        flag_options={
            "server.headless": True,
            "server.port": args.port,
            "browser.gatherUsageStats": False,
        },
    )


if __name__ == "__main__":
    main()
