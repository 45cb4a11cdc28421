"""
Comment lexer for script sources

Reduces JavaScript/TypeScript source to the contents of its comments so
that #DCECOMP markup written in code (strings, identifiers) is ignored.

The output has exactly the same length and the same newline positions as
the input:
- code characters become spaces (newlines kept)
- comment delimiters (/*, */, //) become two spaces
- comment contents are kept verbatim

This keeps every offset, line and column of the filtered text equal to the
original, which the JSON position reporting downstream relies on.

Example:
    >>> CommentLexer("let a = 1; // #DCECOMP {}").filter()
    '              #DCECOMP {}'
"""

from typing import List

from ..models.parser import CommentMode


NEWLINES = ('\n', '\r')


class CommentLexer:
    """
    Three-state machine over a character cursor

    States (CommentMode):
        CODE          -> outside any comment
        BLOCK_COMMENT -> inside /* ... */ (no nesting)
        LINE_COMMENT  -> inside // ... up to the next newline character
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self.mode = CommentMode.CODE

    def lookahead_is(self, pair: str) -> bool:
        """Check the two characters at the cursor, safe at the last index"""
        return self.source.startswith(pair, self.position)

    def filter(self) -> str:
        """
        Run the lexer over the whole source in one pass

        Returns:
            Filtered text, same length and line structure as the source
        """
        result: List[str] = []
        self.position = 0
        self.mode = CommentMode.CODE

        while self.position < len(self.source):
            char = self.source[self.position]

            if self.mode == CommentMode.CODE:
                if self.lookahead_is('/*'):
                    self.mode = CommentMode.BLOCK_COMMENT
                    result.append('  ')
                    self.position += 2
                    continue
                if self.lookahead_is('//'):
                    self.mode = CommentMode.LINE_COMMENT
                    result.append('  ')
                    self.position += 2
                    continue
                result.append(char if char in NEWLINES else ' ')

            elif self.mode == CommentMode.BLOCK_COMMENT:
                if self.lookahead_is('*/'):
                    self.mode = CommentMode.CODE
                    result.append('  ')
                    self.position += 2
                    continue
                result.append(char)

            else:
                if char in NEWLINES:
                    self.mode = CommentMode.CODE
                result.append(char)

            self.position += 1

        return ''.join(result)


def comments_filter(source: str) -> str:
    """Keep only comment contents of `source`, blanking everything else"""
    return CommentLexer(source).filter()
