# objstore/server.py
"""
HTTP server for the object store.

Endpoints:
    PUT    /data/{repository}          - Write object
    GET    /data/{repository}/{oid}    - Read object
    DELETE /data/{repository}/{oid}    - Delete object
    GET    /health                     - Liveness check
    GET    /stats                      - Storage statistics

Each request runs on its own thread against the shared ObjectStore.
"""

import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional, Tuple

from .config import ServerConfig
from .router import Response, Router
from .service import ObjectStore

logger = logging.getLogger(__name__)

DRAIN_TIMEOUT = 0.5


class ObjectHTTPServer(ThreadingHTTPServer):
    """Thread per request, with a listen backlog sized for bursts of clients."""
    request_queue_size = 128
    daemon_threads = True


class ObjectServer:
    """
    HTTP server for the object store.

    Usage:
        server = ObjectServer(ServerConfig(port=8282))
        server.start()  # Blocking
    """

    def __init__(self, config: Optional[ServerConfig] = None, store: Optional[ObjectStore] = None):
        self.config = config or ServerConfig()
        self.store = store or ObjectStore(algorithm=self.config.algorithm)
        self.router = Router(self.store, max_object_size=self.config.max_object_size)
        self._httpd: Optional[ObjectHTTPServer] = None
        self._serving = threading.Event()

    def _create_handler(server_instance):
        """Create request handler with access to server instance."""

        class RequestHandler(BaseHTTPRequestHandler):
            server_ref = server_instance

            def log_message(self, format, *args):
                logger.debug(format % args)

            def _content_length(self) -> int:
                return int(self.headers.get("Content-Length", 0) or 0)

            def _read_body(self, content_length: int) -> bytes:
                if content_length <= 0:
                    return b""
                return self.rfile.read(content_length)

            def _discard_body(self, limit: int = 1 << 20):
                """Drain what the client already sent so closing does not reset it."""
                self.connection.settimeout(DRAIN_TIMEOUT)
                drained = 0
                try:
                    while drained < limit:
                        chunk = self.rfile.read1(65536)
                        if not chunk:
                            break
                        drained += len(chunk)
                except OSError as e:
                    logger.debug(f"Stopped draining refused body: {e}")

            def _send(self, response: Response, include_body: bool = True):
                self.send_response(response.status)
                for name, value in response.headers.items():
                    self.send_header(name, value)
                self.send_header("Content-Length", str(len(response.body)))
                self.end_headers()
                if include_body and response.body:
                    self.wfile.write(response.body)

            def _dispatch(self, include_body: bool = True):
                router = self.server_ref.router
                refused = False
                try:
                    content_length = self._content_length()
                    if router.too_large(self.command, content_length):
                        # Refuse before reading; the unread body ends the connection.
                        self.close_connection = True
                        refused = True
                        response = Response.text("object too large", 413)
                    else:
                        body = self._read_body(content_length)
                        response = router.handle(self.command, self.path, body)
                except ValueError as e:
                    response = Response.json({"error": str(e)}, 400)
                except Exception as e:
                    logger.exception(f"{self.command} {self.path} failed")
                    response = Response.json({"error": str(e)}, 500)
                self._send(response, include_body)
                if refused:
                    self.wfile.flush()
                    self._discard_body()

            def do_GET(self):
                self._dispatch()

            def do_PUT(self):
                self._dispatch()

            def do_DELETE(self):
                self._dispatch()

            def do_POST(self):
                self._dispatch()

            def do_PATCH(self):
                self._dispatch()

            def do_HEAD(self):
                self._dispatch(include_body=False)

        return RequestHandler

    def bind(self) -> ObjectHTTPServer:
        """Bind the listening socket (idempotent)."""
        if self._httpd is None:
            handler = self._create_handler()
            self._httpd = ObjectHTTPServer((self.config.host, self.config.port), handler)
        return self._httpd

    @property
    def server_address(self) -> Tuple[str, int]:
        host, port = self.bind().server_address[:2]
        return host, port

    @property
    def url(self) -> str:
        host, port = self.server_address
        return f"http://{host}:{port}"

    def start(self):
        """Start the HTTP server (blocking)."""
        httpd = self.bind()
        logger.info(f"Object store listening on {self.url} (oid: {self.store.hasher.algorithm})")
        self._serving.set()
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
        finally:
            httpd.server_close()

    def start_background(self) -> threading.Thread:
        """Start the server in a background thread."""
        self.bind()
        self._serving.set()
        thread = threading.Thread(target=self.start)
        thread.daemon = True
        thread.start()
        return thread

    def shutdown(self):
        """Stop serve_forever() running in another thread."""
        if self._httpd is None:
            return
        if self._serving.is_set():
            self._httpd.shutdown()
            self._serving.clear()
        self._httpd.server_close()
        self._httpd = None


def main():
    """Serve entry point (same as `objstore serve`)."""
    from .cli import main as cli_main

    cli_main(["serve"])


if __name__ == "__main__":
    main()
