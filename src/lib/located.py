r"""
Position-preserving JSON decoding

The standard json decoder decides whether a fragment is well-formed; the
tree-sitter JSON grammar supplies the line and column of every token so
schema errors can point at the exact value an author got wrong.

Lines and columns are 1-based and counted in characters, not bytes.
"\r\n", "\r" and "\n" each end one line.
"""

import json
import re
from bisect import bisect_right
from typing import Any, Dict, List

from tree_sitter import Node
from tree_sitter_language_pack import get_parser

from ..models.parser import LocatedValue


SKIPPED_NODE_TYPES = {'comment'}
LINE_BREAK = re.compile(rb'\r\n|\r|\n')


class LocatedJsonDecoder:
    """
    Decodes one JSON text into a LocatedValue tree

    Example:
        >>> root = LocatedJsonDecoder('{\\n  "a": 1}').decode()
        >>> root.get("a").line, root.get("a").column
        (2, 8)
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.source_bytes = text.encode('utf-8')
        # Byte offset where each line starts
        self.line_starts = [0] + [m.end() for m in LINE_BREAK.finditer(self.source_bytes)]

    def decode(self) -> LocatedValue:
        """
        Decode the text

        Returns:
            LocatedValue for the top-level JSON value

        Raises:
            ValueError: If the text is not well-formed JSON
        """
        # Well-formedness is the json module's call
        json.loads(self.text)

        parser = get_parser('json')
        tree = parser.parse(self.source_bytes)
        root = tree.root_node
        if root.has_error:
            raise ValueError("JSON syntax tree contains errors")

        values = [n for n in root.named_children if n.type not in SKIPPED_NODE_TYPES]
        if len(values) != 1:
            raise ValueError(f"Expected exactly one JSON value, found {len(values)}")

        return self.node_convert(values[0])

    def node_convert(self, node: Node) -> LocatedValue:
        """Recursively convert a tree-sitter node to a LocatedValue"""
        line, column = self.position_of(node)

        if node.type == 'object':
            members: Dict[str, LocatedValue] = {}
            for pair in node.named_children:
                if pair.type != 'pair':
                    continue
                key_node = pair.child_by_field_name('key')
                value_node = pair.child_by_field_name('value')
                if key_node is None or value_node is None:
                    raise ValueError("Incomplete object member")
                # Duplicate keys: last one wins, same as json.loads
                members[self.scalar_decode(key_node)] = self.node_convert(value_node)
            return LocatedValue(members, line, column)

        if node.type == 'array':
            items: List[LocatedValue] = [
                self.node_convert(child)
                for child in node.named_children
                if child.type not in SKIPPED_NODE_TYPES
            ]
            return LocatedValue(items, line, column)

        return LocatedValue(self.scalar_decode(node), line, column)

    def scalar_decode(self, node: Node) -> Any:
        """Decode a string/number/true/false/null token with the json module"""
        token = self.source_bytes[node.start_byte:node.end_byte].decode('utf-8')
        return json.loads(token)

    def position_of(self, node: Node) -> tuple:
        """1-based (line, column) of a node, column in characters"""
        offset = node.start_byte
        row = bisect_right(self.line_starts, offset) - 1
        line_prefix = self.source_bytes[self.line_starts[row]:offset]
        column = len(line_prefix.decode('utf-8', errors='replace'))
        return row + 1, column + 1


def json_decodeLocated(text: str) -> LocatedValue:
    """Decode `text` as JSON, keeping token positions"""
    return LocatedJsonDecoder(text).decode()
