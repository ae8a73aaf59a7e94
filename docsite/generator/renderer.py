"""Markdown rendering with Pygments-highlighted code blocks.

Every code block (backtick or tilde fence, or an indented block) reaches
Pygments through ``codehilite``, which hands its language to the formatter
built by :class:`LabelledHtmlFormatter`. Highlighted blocks carry that language
as ``data-language`` on the ``div.codehilite`` wrapper. Blocks without a
language are emitted as plain ``<pre><code>`` with the inline code classes.
"""

from __future__ import annotations

import functools
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

PLAIN_LANGUAGE = "text"
INDENTED_FENCE_PATTERN = re.compile(r"^ {1,3}(?=(?:`{3,}|~{3,}))", re.MULTILINE)
FENCE_ATTRIBUTES_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,})(?P<lang>[\w+#.-]+),[^\r\n]*$", re.MULTILINE
)


class LabelledHtmlFormatter(HtmlFormatter):
    """HTML formatter that records the block language on its wrapper.

    ``codehilite`` instantiates the formatter once per block and passes the
    block's language as ``lang_str``. An unlabelled block arrives as
    ``"text"`` and is written without highlighting markup.
    """

    def __init__(
        self, lang_str: str = "", plain_code_class: str = "", **options: typ.Any
    ) -> None:
        super().__init__(**options)
        self.language = lang_str or PLAIN_LANGUAGE
        self.plain_code_class = plain_code_class

    def format_unencoded(
        self, tokensource: cabc.Iterable[tuple[typ.Any, str]], outfile: typ.Any
    ) -> None:
        if self.language != PLAIN_LANGUAGE:
            super().format_unencoded(tokensource, outfile)
            return
        text = escape("".join(value for _, value in tokensource), quote=False)
        class_attr = (
            f' class="{escape(self.plain_code_class)}"' if self.plain_code_class else ""
        )
        outfile.write(f"<pre><code{class_attr}>{text}</code></pre>\n")

    def _wrap_div(self, inner: typ.Any) -> cabc.Iterator[tuple[int, str]]:
        wrapped = super()._wrap_div(inner)
        kind, opening = next(wrapped)
        label = escape(self.language, quote=True)
        yield kind, f'{opening[:-1]} data-language="{label}">'
        yield from wrapped


class HtmlContentRenderer:
    """Render markdown documents to HTML fragments."""

    def __init__(
        self,
        pygments_style: str = "monokai",
        extensions: typ.Sequence[Extension] = (),
        *,
        plain_code_class: str = "",
    ) -> None:
        """Create a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style used for highlighted blocks and :attr:`stylesheet`.
        extensions : Sequence[Extension], optional
            Extra Markdown extensions (styling, link rewriting) registered after
            the built-in ones.
        plain_code_class : str, optional
            Class attribute for code blocks that carry no language.
        """
        self.pygments_style = pygments_style
        self.plain_code_class = plain_code_class
        self._extensions = list(extensions)

    @property
    def stylesheet(self) -> str:
        """Return the CSS rules for ``.codehilite`` blocks."""
        formatter = HtmlFormatter(style=self.pygments_style, cssclass="codehilite")
        return formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Return ``text`` rendered as an HTML fragment."""
        source = self._normalize_fences(text)
        if not source.strip():
            return ""
        formatter = functools.partial(
            LabelledHtmlFormatter, plain_code_class=self.plain_code_class
        )
        md = Markdown(
            extensions=[
                "fenced_code",
                "codehilite",
                "tables",
                "sane_lists",
                *self._extensions,
            ],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "lang_prefix": "",
                    "pygments_style": self.pygments_style,
                    "pygments_formatter": formatter,
                }
            },
        )
        return md.convert(source)

    @staticmethod
    def _normalize_fences(text: str) -> str:
        """Outdent fences nested in list items and drop ``lang,attr`` suffixes."""
        outdented = INDENTED_FENCE_PATTERN.sub("", text)
        return FENCE_ATTRIBUTES_PATTERN.sub(r"\g<fence>\g<lang>", outdented)


__all__ = ["PLAIN_LANGUAGE", "HtmlContentRenderer", "LabelledHtmlFormatter"]
