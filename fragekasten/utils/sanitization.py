"""Markdown stripping for submitted questions."""

from typing import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token

_parser = MarkdownIt("commonmark")

_TEXT_TOKENS = {"text", "text_special", "code_inline"}
_BLOCK_CODE_TOKENS = {"fence", "code_block"}


def strip_markdown(markdown: str) -> str:
    """Remove Markdown from *markdown* and return the plain text it contains.

    Only text runs and code (inline spans and code blocks) are kept, joined
    in document order. Raw HTML and line breaks are dropped. Malformed markup
    is never an error: whatever the parser reads as text is returned.
    """
    parts = []
    for token in _parser.parse(markdown):
        if token.type in _BLOCK_CODE_TOKENS:
            parts.append(token.content)
        elif token.children:
            parts.extend(child.content for child in _walk_inline(token.children))
    return "".join(parts)


def _walk_inline(tokens: Iterable[Token]) -> Iterator[Token]:
    # Image alt text lives in the image token's own children.
    for token in tokens:
        if token.type in _TEXT_TOKENS:
            yield token
        elif token.children:
            yield from _walk_inline(token.children)
