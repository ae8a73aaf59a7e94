"""Development HTTP server for a built documentation tree.

Requests are mapped onto files below a fixed output root by
:func:`resolve_request`, a pure function returning a :class:`StaticResponse`.
:class:`StaticFileHandler` only writes that response to the socket, so the
path rules can be tested without opening a port.

Resolution rules:

* ``:`` or ``\\`` anywhere in the decoded path is rejected with 400.
* Repeated slashes collapse; ``/`` and paths ending in ``/`` map to
  ``index.html`` inside that directory; a last segment without an extension
  maps to ``{path}/index.html``.
* A path mentioning a configured sidecar filename serves that file from the
  root, whatever directory it was requested under.
* The candidate is resolved canonically (``..`` segments and symlinks
  included) and must stay inside the resolved root, otherwise 403.
* Missing files answer 404 with the root's ``404.html`` when it exists.

Example
-------
>>> from pathlib import Path
>>> from docsite.server import resolve_request
>>> resolve_request("/a:b", Path("dist")).status
<HTTPStatus.BAD_REQUEST: 400>
"""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import re
import shutil
import typing as typ
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path, PurePosixPath
from urllib.parse import unquote

from docsite._constants import (
    CONTENT_TYPES,
    DEFAULT_CONTENT_TYPE,
    INDEX_FILENAME,
    NOT_FOUND_FILENAME,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

REPEATED_SLASHES = re.compile(r"/{2,}")
PLAIN_TEXT = "text/plain; charset=utf-8"


@dc.dataclass(frozen=True, slots=True)
class StaticResponse:
    """Outcome of resolving one request path.

    Attributes
    ----------
    status : HTTPStatus
        Response status.
    content_type : str
        ``Content-Type`` header value.
    path : Path or None
        File whose bytes form the body; ``None`` when ``body`` is used.
    body : bytes
        Literal body for responses without a backing file.
    """

    status: HTTPStatus
    content_type: str
    path: Path | None = None
    body: bytes = b""


def content_type_for(path: PurePosixPath | Path) -> str:
    """Return the content type for ``path`` from the fixed extension table."""
    return CONTENT_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def normalize_request_path(
    raw_path: str, sidecar_files: cabc.Iterable[str] = ()
) -> str | None:
    """Return the root-relative file path for ``raw_path``.

    Returns ``None`` when the path contains a drive or scheme separator or a
    backslash. The result always starts with ``/`` and names a file, not a
    directory.
    """
    target = raw_path.split("?", 1)[0].split("#", 1)[0]
    path = unquote(target)
    if ":" in path or "\\" in path:
        return None

    path = REPEATED_SLASHES.sub("/", path)
    if not path.startswith("/"):
        path = f"/{path}"

    if path.endswith("/"):
        path = f"{path}{INDEX_FILENAME}"
    elif not PurePosixPath(path).suffix:
        path = f"{path}/{INDEX_FILENAME}"

    for name in sidecar_files:
        if name and name in path:
            return f"/{name}"
    return path


def resolve_request(
    raw_path: str, root: Path, *, sidecar_files: cabc.Iterable[str] = ()
) -> StaticResponse:
    """Map ``raw_path`` onto a file below ``root``.

    Parameters
    ----------
    raw_path : str
        Request target as received (query strings are ignored).
    root : Path
        Output root of a built site.
    sidecar_files : Iterable[str], optional
        Filenames served from the root whenever they appear in a path.

    Returns
    -------
    StaticResponse
        200 with the file, or 400/403/404/500 as described in the module
        docstring.
    """
    normalized = normalize_request_path(raw_path, sidecar_files)
    if normalized is None:
        logger.warning("Rejected invalid path: %s", raw_path)
        return _text_response(HTTPStatus.BAD_REQUEST)

    try:
        root_dir = root.resolve()
        candidate = (root_dir / normalized.lstrip("/")).resolve()
        if not candidate.is_relative_to(root_dir):
            logger.warning("Path outside output root: %s", candidate)
            return _text_response(HTTPStatus.FORBIDDEN)

        if not candidate.is_file():
            logger.info("File not found: %s", candidate)
            not_found = root_dir / NOT_FOUND_FILENAME
            if not_found.is_file():
                return StaticResponse(
                    HTTPStatus.NOT_FOUND, content_type_for(not_found), path=not_found
                )
            return _text_response(HTTPStatus.NOT_FOUND)
    except Exception:
        logger.exception("Failed to resolve %s", raw_path)
        return _text_response(HTTPStatus.INTERNAL_SERVER_ERROR)

    return StaticResponse(HTTPStatus.OK, content_type_for(candidate), path=candidate)


def _text_response(status: HTTPStatus) -> StaticResponse:
    return StaticResponse(status, PLAIN_TEXT, body=status.phrase.encode("utf-8"))


class DocsHTTPServer(ThreadingHTTPServer):
    """Threading HTTP server holding the read-only serving configuration."""

    daemon_threads = True

    def __init__(
        self,
        server_address: tuple[str, int],
        root: Path,
        *,
        sidecar_files: cabc.Iterable[str] = (),
    ) -> None:
        self.root = root
        self.sidecar_files = tuple(sidecar_files)
        super().__init__(server_address, StaticFileHandler)


class StaticFileHandler(BaseHTTPRequestHandler):
    """Serve files from the owning :class:`DocsHTTPServer` root."""

    server: DocsHTTPServer
    server_version = "docsite"

    def do_GET(self) -> None:  # noqa: N802
        """Resolve the request path and stream the response."""
        logger.debug("Request: %s", self.path)
        response = resolve_request(
            self.path, self.server.root, sidecar_files=self.server.sidecar_files
        )
        if response.path is None:
            self._send(response.status, response.content_type, response.body)
            return

        try:
            handle = response.path.open("rb")
        except OSError:
            logger.exception("Server error opening %s", response.path)
            error = _text_response(HTTPStatus.INTERNAL_SERVER_ERROR)
            self._send(error.status, error.content_type, error.body)
            return

        with handle:
            size = os.fstat(handle.fileno()).st_size
            self.send_response(response.status)
            self.send_header("Content-Type", response.content_type)
            self.send_header("Content-Length", str(size))
            self.end_headers()
            shutil.copyfileobj(handle, self.wfile)
        if response.status is HTTPStatus.OK:
            logger.info("Serving: %s", response.path)

    def _send(self, status: HTTPStatus, content_type: str, body: bytes) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: typ.Any) -> None:  # noqa: A002
        """Route the access log through :mod:`logging` instead of stderr."""
        logger.info("%s - %s", self.address_string(), format % args)


def serve(
    root: Path,
    *,
    host: str = "127.0.0.1",
    port: int = 3000,
    sidecar_files: cabc.Iterable[str] = (),
) -> None:
    """Serve ``root`` until interrupted.

    Raises
    ------
    FileNotFoundError
        If ``root`` does not exist; run ``docsite build`` first.
    """
    if not root.is_dir():
        msg = f"Output root '{root}' not found; build the site first."
        raise FileNotFoundError(msg)

    with DocsHTTPServer((host, port), root, sidecar_files=sidecar_files) as httpd:
        bound_host, bound_port = httpd.server_address[:2]
        logger.info(
            "Documentation server running on http://%s:%s", bound_host, bound_port
        )
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Server stopped")


__all__ = [
    "DocsHTTPServer",
    "StaticFileHandler",
    "StaticResponse",
    "content_type_for",
    "normalize_request_path",
    "resolve_request",
    "serve",
]
