"""
Tree-sitter backed syntax host for C# sources.

Builds the lossless HotRefactor tree from tree-sitter's concrete syntax tree:
leaves become tokens, the text between two tokens becomes trivia, and
interior nodes keep tree-sitter's shape except for ``modifier`` wrappers,
which are flattened so a declaration's modifier keywords sit directly in it.

Trivia attachment follows the usual IDE convention: a token owns the trivia
after it up to and including the first line terminator; the rest leads the
next token. Trivia after the last token leads a zero-width end-of-file token.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Dict, List, Optional, Tuple

import tree_sitter_c_sharp as tscsharp
from tree_sitter import Language, Node as TSNode, Parser

from ..cancellation import CancellationToken
from ..config import HostConfig
from ..document import Document
from ..errors import SourceTooLargeError
from ..syntax import (
    NODE_CLASSES,
    CompilationUnit,
    Node,
    SyntaxElement,
    SyntaxTree,
    TextSpan,
    Token,
    Trivia,
    TriviaKind,
    TypeDeclaration,
)

logger = logging.getLogger(__name__)

# Tree-sitter node types whose tokens are spliced into the parent node.
FLATTENED_NODE_TYPES = frozenset({"modifier"})

# Type bodies whose braces belong to the enclosing declaration.
BODY_NODE_TYPES = frozenset({"declaration_list", "enum_member_declaration_list"})

EOF_KIND = "end_of_file"

_TRIVIA_PATTERN = re.compile(
    r"(?P<eol>\r\n|\r|\n)"
    r"|(?P<ws>[^\S\r\n]+)"
    r"|(?P<line_comment>//[^\r\n]*)"
    r"|(?P<block_comment>/\*.*?\*/)"
    r"|(?P<skipped>[^\s/]+|/)",
    re.DOTALL,
)

_TRIVIA_KINDS = {
    "eol": TriviaKind.END_OF_LINE,
    "ws": TriviaKind.WHITESPACE,
    "line_comment": TriviaKind.SINGLE_LINE_COMMENT,
    "block_comment": TriviaKind.MULTI_LINE_COMMENT,
    "skipped": TriviaKind.SKIPPED,
}

_language: Optional[Language] = None


def _get_language() -> Language:
    global _language
    if _language is None:
        _language = Language(tscsharp.language())
    return _language


def split_trivia(text: str) -> List[Trivia]:
    """Split inter-token text into trivia elements."""
    return [
        Trivia(_TRIVIA_KINDS[match.lastgroup], match.group())
        for match in _TRIVIA_PATTERN.finditer(text)
    ]


def _split_at_line_end(pending: List[Trivia]) -> Tuple[List[Trivia], List[Trivia]]:
    for index, trivia in enumerate(pending):
        if trivia.is_end_of_line:
            return pending[: index + 1], pending[index + 1:]
    return pending, []


class CSharpSyntaxHost:
    """Parses C# text into immutable HotRefactor trees."""

    def __init__(self, settings: Optional[HostConfig] = None):
        self.settings = settings or HostConfig()

    def parse(self, text: str) -> SyntaxTree:
        """Parse ``text`` into a tree whose full text equals ``text``."""
        data = text.encode("utf-8", errors="surrogatepass")
        if len(data) > self.settings.max_file_size:
            raise SourceTooLargeError(
                f"Source is {len(data)} bytes, limit is {self.settings.max_file_size}"
            )

        parser = Parser(_get_language())
        ts_tree = parser.parse(data)

        tokens, eof = self._collect_tokens(data, ts_tree.root_node)
        elements = self._build(ts_tree.root_node, tokens)

        if len(elements) == 1 and isinstance(elements[0], CompilationUnit):
            root = elements[0]
            root = root.with_children(root.children + (eof,))
        else:
            root = CompilationUnit("compilation_unit", tuple(elements) + (eof,))

        tree = SyntaxTree(root)
        logger.debug(f"Parsed {len(text)} characters into {len(tokens)} tokens")
        return tree

    def open_document(self, text: str, path: Optional[str] = None) -> Document:
        """Create a document for ``text`` with its tree already parsed."""
        return Document(text=text, path=path, tree=self.parse(text))

    async def get_syntax_tree(
        self, document: Document, cancellation_token: Optional[CancellationToken] = None
    ) -> SyntaxTree:
        token = cancellation_token or CancellationToken()
        token.throw_if_cancellation_requested()

        if document.tree is not None:
            tree = document.tree
        else:
            tree = await asyncio.to_thread(self.parse, document.text)

        token.throw_if_cancellation_requested()
        return tree

    def find_node(self, tree: SyntaxTree, span: TextSpan) -> Optional[Node]:
        """Innermost node containing ``span``.

        A span on the opening or closing brace of a type body resolves to the
        type declaration rather than to the body.
        """
        path = tree.find_path(span)
        node = path[-1]
        if (
            node.kind in BODY_NODE_TYPES
            and len(path) > 1
            and isinstance(path[-2], TypeDeclaration)
        ):
            token = tree.find_token(span)
            if token is node.first_token() or token is node.last_token():
                return path[-2]
        return node

    # ------------------------------------------------------------------
    # Tree construction
    # ------------------------------------------------------------------

    @staticmethod
    def _leaves(root: TSNode) -> List[TSNode]:
        leaves = []
        stack = [root]
        while stack:
            node = stack.pop()
            if node.child_count == 0:
                leaves.append(node)
            else:
                stack.extend(reversed(node.children))
        return leaves

    def _collect_tokens(
        self, data: bytes, root: TSNode
    ) -> Tuple[Dict[Tuple[int, int], Token], Token]:
        """Turn tree-sitter leaves into tokens keyed by their byte range."""
        records: List[list] = []
        pending: List[Trivia] = []
        cursor = 0

        for leaf in self._leaves(root):
            start, end = leaf.start_byte, leaf.end_byte
            # Zero-width (missing) leaves carry no text; comments become trivia.
            if end <= start or start < cursor or leaf.type == "comment":
                continue

            pending.extend(split_trivia(self._decode(data[cursor:start])))
            leading = self._hand_off(records, pending)
            records.append(
                [(start, end), leaf.type, self._decode(data[start:end]), leading, []]
            )
            pending = []
            cursor = end

        pending.extend(split_trivia(self._decode(data[cursor:])))
        eof_leading = self._hand_off(records, pending)

        tokens = {
            key: Token(kind, text, tuple(leading), tuple(trailing))
            for key, kind, text, leading, trailing in records
        }
        eof = Token(EOF_KIND, "", tuple(eof_leading), ())
        return tokens, eof

    @staticmethod
    def _hand_off(records: List[list], pending: List[Trivia]) -> List[Trivia]:
        """Give the previous token its trailing trivia; return the leading rest."""
        if not records:
            return list(pending)
        trailing, leading = _split_at_line_end(pending)
        records[-1][4] = list(trailing)
        return list(leading)

    def _build(
        self, ts_node: TSNode, tokens: Dict[Tuple[int, int], Token]
    ) -> List[SyntaxElement]:
        if ts_node.child_count == 0:
            token = tokens.pop((ts_node.start_byte, ts_node.end_byte), None)
            return [token] if token is not None else []

        elements: List[SyntaxElement] = []
        for child in ts_node.children:
            elements.extend(self._build(child, tokens))

        if not elements:
            return []
        if ts_node.type in FLATTENED_NODE_TYPES:
            return elements

        node_class = NODE_CLASSES.get(ts_node.type, Node)
        return [node_class(ts_node.type, tuple(elements))]

    @staticmethod
    def _decode(data: bytes) -> str:
        return data.decode("utf-8", errors="surrogatepass")
