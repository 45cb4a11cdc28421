"""
Comment lexer tests

Tests that script sources are reduced to their comment contents while
keeping length and line structure intact.
"""

import random

import pytest

from dcecomp.lib.lexer import CommentLexer, comments_filter


class TestCodeIsBlanked:
    """Test handling of text outside comments"""

    def test_empty_source(self):
        """Empty source filters to empty string"""
        assert comments_filter("") == ""

    def test_plain_code(self):
        """Code without comments becomes spaces"""
        assert comments_filter("let a = 1;") == " " * 10

    def test_newlines_kept_in_code(self):
        """Newline characters in code are preserved"""
        assert comments_filter("a\nb\r\nc") == " \n \r\n "

    def test_marker_in_string_is_removed(self):
        """A marker inside a string literal is not a comment"""
        source = 'const s = "#DCECOMP {}";'
        assert "#DCECOMP" not in comments_filter(source)


class TestBlockComments:
    """Test /* ... */ handling"""

    def test_block_comment_contents_kept(self):
        """Delimiters become two spaces, contents stay"""
        assert comments_filter("x/* hi */y") == " " * 4 + "hi" + " " * 4

    def test_block_comment_multiline(self):
        """Newlines inside a block comment are kept verbatim"""
        source = "a /* one\n two */ b"
        assert comments_filter(source) == " " * 5 + "one\n two" + " " * 5

    def test_no_nesting(self):
        """The first */ closes the comment"""
        source = "/* a /* b */ c */"
        assert comments_filter(source) == "   a /* b " + " " * 7

    def test_unterminated_block_comment(self):
        """An unterminated block comment runs to end of input"""
        assert comments_filter("x /* open") == "     open"

    def test_line_comment_start_inside_block(self):
        """// inside a block comment is plain comment text"""
        assert comments_filter("/* a // b */") == "   a // b   "


class TestLineComments:
    """Test // handling"""

    def test_line_comment_contents_kept(self):
        """Text after // up to the newline is kept"""
        source = "let a = 1; // #DCECOMP {}\nlet b;"
        expected = " " * 11 + "   #DCECOMP {}\n" + " " * 6
        assert comments_filter(source) == expected

    def test_line_comment_ends_at_carriage_return(self):
        """A carriage return also ends a line comment"""
        assert comments_filter("// a\rb") == "   a\r "

    def test_consecutive_line_comments(self):
        """Markup spread over several // lines stays aligned"""
        source = "// #DCECOMP {\n//   \"class\": \"A\"\n// }"
        expected = "   #DCECOMP {\n     \"class\": \"A\"\n   }"
        assert comments_filter(source) == expected


class TestBoundaries:
    """Test look-ahead at the end of input"""

    @pytest.mark.parametrize("source", ["/", "a/", "/*/", "/* *", "//", "*/"])
    def test_trailing_delimiter_characters(self, source):
        """Lone delimiter characters at the last index do not fault"""
        assert len(comments_filter(source)) == len(source)

    def test_lexer_can_be_rerun(self):
        """filter() resets state between runs"""
        lexer = CommentLexer("/* a")
        assert lexer.filter() == lexer.filter()


class TestLayoutPreservation:
    """Filtering keeps length and newline positions for any input"""

    FRAGMENTS = ["code", " ", "\n", "\r\n", "/*", "*/", "//", "/", "*", "{", "}", '"', "#DCECOMP", "x"]

    @pytest.mark.parametrize("seed", range(25))
    def test_random_sources(self, seed):
        """Random mixes of code and comment delimiters"""
        rng = random.Random(seed)
        source = "".join(rng.choice(self.FRAGMENTS) for _ in range(rng.randint(0, 80)))

        filtered = comments_filter(source)

        assert len(filtered) == len(source)
        for index, char in enumerate(source):
            if char in "\n\r":
                assert filtered[index] == char
            else:
                assert filtered[index] not in "\n\r"
