"""Common literal values used across docsite.

These constants keep the output layout and source classification centralized
so the builder, the development server, and tests agree on filenames without
drifting. Intended for internal use within the docsite package.

Examples
--------
>>> from docsite import _constants
>>> _constants.INDEX_FILENAME
'index.html'
>>> ".json" in _constants.DEFAULT_SIDECAR_EXTENSIONS
True
"""

DOCUMENT_EXTENSION = ".md"
DEFAULT_SIDECAR_EXTENSIONS = (".json",)
INDEX_FILENAME = "index.html"
NOT_FOUND_FILENAME = "404.html"

EXCERPT_LENGTH = 150
DESCRIPTION_LENGTH = 160
EXCERPT_FALLBACK = "Documentation page"

CONTENT_TYPES = {
    ".json": "application/json",
    ".css": "text/css",
    ".js": "application/javascript",
}
DEFAULT_CONTENT_TYPE = "text/html"
