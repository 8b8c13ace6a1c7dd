import threading
import time
import webbrowser

import uvicorn

from linkshelf.config import get_settings, setup_logging


def run_uvicorn(host: str, port: int):
    """
    Run the FastAPI app via uvicorn in this process
    (called in a background thread).
    """
    config = uvicorn.Config(
        "linkshelf.main:app",
        host=host,
        port=port,
        log_level="info",
        reload=False,
    )
    server = uvicorn.Server(config)
    server.run()


def open_browser_once(host: str, port: int):
    url = f"http://{host}:{port}/docs"
    print(f"[server] Opening {url}")
    try:
        webbrowser.open(url)
    except webbrowser.Error:
        pass


def main():
    settings = get_settings()
    setup_logging(settings.log_level)

    # start uvicorn in a separate thread
    t = threading.Thread(
        target=run_uvicorn, args=(settings.host, settings.port), daemon=True
    )
    t.start()

    # give it a moment to boot before opening browser
    time.sleep(1.0)
    open_browser_once(settings.host, settings.port)

    print("[server] Running. Press Ctrl+C to quit.")
    try:
        while t.is_alive():
            time.sleep(1.0)
    except KeyboardInterrupt:
        print("\n[server] Shutting down.")


if __name__ == "__main__":
    main()
