"""
Fragment decoding tests

Tests position-preserving JSON decoding and the per-file MarkupParser:
provenance, import path defaults and invalid JSON handling.
"""

import pytest

from dcecomp.lib.located import json_decodeLocated
from dcecomp.lib.parser import MarkupParser, importPath_fromSourcePath
from dcecomp.models import SourceKind
from dcecomp.models.problems import MESSAGE_INVALID_JSON


class TestLocatedDecoding:
    """Test JSON decoding with token positions"""

    def test_values_decoded(self):
        """Plain values match the json module"""
        root = json_decodeLocated('{"s": "x\\n", "n": 1.5, "i": 2, "b": true, "z": null, "a": [1, 2]}')

        assert root.plain() == {"s": "x\n", "n": 1.5, "i": 2, "b": True, "z": None, "a": [1, 2]}

    def test_token_positions(self):
        """Lines and columns are 1-based and point at the value token"""
        root = json_decodeLocated('{\n  "class": "Door",\n  "properties": [\n    {"type": 3}\n  ]\n}')

        assert (root.line, root.column) == (1, 1)
        assert (root.get("class").line, root.get("class").column) == (2, 12)
        properties = root.get("properties")
        assert (properties.line, properties.column) == (3, 17)
        first = properties.value[0]
        assert (first.line, first.column) == (4, 5)
        assert (first.get("type").line, first.get("type").column) == (4, 14)

    def test_leading_blank_lines(self):
        """Blanked prefixes shift positions like the original file"""
        root = json_decodeLocated('\n\n     {"a": 1}')

        assert (root.line, root.column) == (3, 6)
        assert (root.get("a").line, root.get("a").column) == (3, 12)

    def test_columns_count_characters(self):
        """Non-ASCII text before a token does not inflate its column"""
        root = json_decodeLocated('{"ä": "ö", "b": 1}')

        assert root.get("b").column == 17

    def test_duplicate_keys_last_wins(self):
        """Duplicate keys keep the last value"""
        root = json_decodeLocated('{"a": 1, "a": 2}')

        assert root.get("a").value == 2

    @pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
    def test_line_break_styles(self, newline):
        """CR, CRLF and LF each count as one line break"""
        root = json_decodeLocated(newline.join(["{", '  "a": 1,', '  "b": 2', "}"]))

        assert (root.get("a").line, root.get("a").column) == (2, 8)
        assert (root.get("b").line, root.get("b").column) == (3, 8)

    @pytest.mark.parametrize("text", ["", "   ", "{", '{"a": }', "{'a': 1}", '{"a": 1} {"b": 2}'])
    def test_invalid_json(self, text):
        """Malformed JSON raises ValueError"""
        with pytest.raises(ValueError):
            json_decodeLocated(text)


class TestImportPath:
    """Test import path derivation"""

    def test_relative_without_extension(self):
        """Path is made relative to the root and loses its extension"""
        assert importPath_fromSourcePath("/proj/src/door.ts", "/proj") == "src/door"

    def test_file_in_root(self):
        """Files in the root have no folder part"""
        assert importPath_fromSourcePath("/proj/door.js", "/proj") == "door"

    def test_only_last_extension_removed(self):
        """Only the final extension is stripped"""
        assert importPath_fromSourcePath("/proj/a/door.min.js", "/proj") == "a/door.min"


class TestMarkupParser:
    """Test per-file parsing"""

    def test_script_markup_in_block_comment(self):
        """Markup in a block comment of a script is decoded"""
        source = 'export class Door {}\n/* #DCECOMP {"class": "Door"} */\n'
        result = MarkupParser(source, "/proj/door.ts", project_root="/proj").parse()

        assert result.problems == []
        assert len(result.markups) == 1
        markup = result.markups[0]
        assert markup.sourcePath == "/proj/door.ts"
        assert markup.kind == SourceKind.SCRIPT
        assert markup.root.get("class").value == "Door"
        assert (markup.root.get("class").line, markup.root.get("class").column) == (2, 23)

    def test_script_markup_outside_comment_ignored(self):
        """Markup in script code (not a comment) is not picked up"""
        source = 'const m = "#DCECOMP {}";\n'
        result = MarkupParser(source, "m.js").parse()

        assert result.markups == []
        assert result.problems == []

    def test_script_import_file_synthesized(self):
        """Scripts without import-file get one from their path"""
        source = '// #DCECOMP {"class": "Door"}\n'
        result = MarkupParser(source, "/proj/src/door.js", project_root="/proj").parse()

        import_file = result.markups[0].root.get("import-file")
        assert import_file.value == "src/door"
        assert (import_file.line, import_file.column) == (-1, -1)

    def test_script_explicit_import_file_kept(self):
        """An explicit import-file is not overwritten"""
        source = '// #DCECOMP {"class": "Door", "import-file": "lib/door"}\n'
        result = MarkupParser(source, "/proj/src/door.js", project_root="/proj").parse()

        assert result.markups[0].root.get("import-file").value == "lib/door"

    def test_markup_only_file_not_filtered(self):
        """.dcecomp files are scanned as-is and get no import-file default"""
        source = '#DCECOMP {"class": "Door"}'
        result = MarkupParser(source, "/proj/door.dcecomp", project_root="/proj").parse()

        assert result.markups[0].kind == SourceKind.MARKUP_ONLY
        assert result.markups[0].root.get("import-file") is None

    def test_invalid_json_problem(self):
        """A marker without valid JSON yields one path-only problem"""
        source = '#DCECOMP {"class": }\n#DCECOMP {"class": "B"}'
        result = MarkupParser(source, "x.dcecomp").parse()

        assert len(result.problems) == 1
        problem = result.problems[0]
        assert problem.description == MESSAGE_INVALID_JSON
        assert (problem.path, problem.line, problem.column) == ("x.dcecomp", -1, -1)
        assert [m.root.get("class").value for m in result.markups] == ["B"]

    def test_marker_without_object(self):
        """A marker followed by no object is a decode problem"""
        result = MarkupParser("#DCECOMP", "x.dcecomp").parse()

        assert len(result.problems) == 1
        assert result.markups == []

    def test_unclosed_fragment(self):
        """A fragment whose brace never closes is a decode problem, not a crash"""
        result = MarkupParser('#DCECOMP {"class": "A", "x": {', "x.dcecomp").parse()

        assert [p.description for p in result.problems] == [MESSAGE_INVALID_JSON]

    def test_deeply_nested_fragment(self):
        """Nesting beyond the interpreter's recursion limit is a decode problem"""
        depth = 3000
        source = (
            '#DCECOMP {"class": "Deep", "extra": ' + '{"a": ' * depth + "1" + "}" * depth + "}\n"
            '#DCECOMP {"class": "B"}'
        )
        result = MarkupParser(source, "x.dcecomp").parse()

        assert [p.description for p in result.problems] == [MESSAGE_INVALID_JSON]
        assert [m.root.get("class").value for m in result.markups] == ["B"]

    def test_author_key_cannot_clash_with_provenance(self):
        """Any author key is kept as-is; provenance lives beside the object"""
        source = '#DCECOMP {"class": "A", "sourcePath": "fake"}'
        result = MarkupParser(source, "real.dcecomp").parse()

        markup = result.markups[0]
        assert markup.sourcePath == "real.dcecomp"
        assert markup.root.get("sourcePath").value == "fake"

    def test_custom_marker(self):
        """The marker token can be overridden"""
        result = MarkupParser('@COMP {"class": "A"}', "x.dcecomp", marker="@COMP").parse()

        assert len(result.markups) == 1

    def test_multiline_line_comments(self):
        """JSON spread over // lines keeps its file positions"""
        source = (
            "// #DCECOMP {\n"
            '//   "class": "Door",\n'
            '//   "properties": []\n'
            "// }\n"
            "export class Door {}\n"
        )
        result = MarkupParser(source, "door.ts").parse()

        class_token = result.markups[0].root.get("class")
        assert (class_token.line, class_token.column) == (2, 15)
