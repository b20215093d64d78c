"""Tests for the dialogue script parser and packer."""

import pytest

from msgscript.script import (
    Alias,
    Animation,
    Other,
    ScriptParseError,
    TokenStream,
    Window,
    pack,
    parse,
)

SAMPLE = (
    "[MID_A]\n"
    "$Window(PID_001)Hello there.$Wait(30)\n"
    "$Animation(PID_002, Nod)Fine.\n"
    "[MID_B]\n"
    '$Alias(PID_003, "Mysterious Man")???\n'
)


class TestParse:
    """Tokenizing script text."""

    def test_sample_structure(self) -> None:
        stream = parse(SAMPLE)
        assert list(stream.entries) == ["MID_A", "MID_B"]
        assert stream.entries["MID_A"] == [
            Window("PID_001"),
            Other("Hello there."),
            Other("$Wait(30)"),
            Other("\n"),
            Animation("PID_002", ("Nod",)),
            Other("Fine."),
        ]
        assert stream.entries["MID_B"] == [
            Alias("PID_003", ("Mysterious Man",)),
            Other("???"),
        ]

    def test_empty_source(self) -> None:
        assert len(parse("")) == 0
        assert len(parse("\n\n")) == 0

    def test_blank_lines_before_first_entry(self) -> None:
        stream = parse("\n  \n[K]\nHi\n")
        assert stream.entries == {"K": [Other("Hi")]}

    def test_entry_without_body(self) -> None:
        stream = parse("[A]\n[B]\nx\n")
        assert stream.entries["A"] == []
        assert stream.entries["B"] == [Other("x")]

    def test_multiline_text_is_one_token(self) -> None:
        stream = parse("[K]\nline1\n\nline3\n")
        assert stream.entries["K"] == [Other("line1\n\nline3")]

    def test_unknown_commands_are_verbatim(self) -> None:
        stream = parse("[K]\nHi$Br there$Wait( 30 )\n")
        assert stream.entries["K"] == [
            Other("Hi"),
            Other("$Br"),
            Other(" there"),
            Other("$Wait( 30 )"),
        ]

    def test_escaped_text(self) -> None:
        stream = parse("[K]\n\\[not a header] costs 5\\$\n")
        assert stream.entries["K"] == [Other("\\[not a header] costs 5\\$")]

    def test_argument_whitespace(self) -> None:
        stream = parse('[K]\n$Window( PID_001 ,"x" )\n')
        assert stream.entries["K"] == [Window("PID_001", ("x",))]

    def test_quoted_argument_escapes(self) -> None:
        stream = parse('[K]\n$Window("Say \\"hi\\"", "a\\\\b", "x\\ny")\n')
        assert stream.entries["K"] == [Window('Say "hi"', ("a\\b", "x\ny"))]

    def test_crlf_line_endings(self) -> None:
        stream = parse("[MID_A]\r\n$Window(PID_001)Hi\r\nthere\r\n[MID_B]\r\nok\r\n")
        assert stream.entries == {
            "MID_A": [Window("PID_001"), Other("Hi\nthere")],
            "MID_B": [Other("ok")],
        }

    def test_leading_byte_order_mark(self) -> None:
        stream = parse("\ufeff[MID_A]\n$Window(PID_001)Hi\n")
        assert stream.entries == {"MID_A": [Window("PID_001"), Other("Hi")]}

    def test_duplicate_entry_rejected(self) -> None:
        with pytest.raises(ScriptParseError) as exc_info:
            parse("[K]\na\n[K]\nb\n")
        assert exc_info.value.line == 3

    @pytest.mark.parametrize(
        "source, message",
        [
            ("Hello\n[K]\n", "text outside of an entry"),
            ("[K\n", "unterminated entry header"),
            ("[]\n", "empty entry key"),
            ("[K]\n$(x)\n", "expected command name"),
            ("[K]\n$Window(PID_001\n", "unterminated argument list"),
            ('[K]\n$Wait("abc)\n', "unterminated string"),
            ("[K]\n$Window()\n", "needs an identifier"),
            ("[K]\n$Alias\n", "needs an identifier"),
            ("[K]\n$Wait(a,,b)\n", "empty argument"),
            ("[K]\n$Wait(a b)\n", "unexpected 'b'"),
            ("[K]\nabc\\\n", "dangling escape"),
        ],
    )
    def test_malformed_input(self, source: str, message: str) -> None:
        with pytest.raises(ScriptParseError, match=message):
            parse(source)

    def test_error_position(self) -> None:
        with pytest.raises(ScriptParseError) as exc_info:
            parse("[A]\nok\n[B]\nfine $Window()\n")
        assert exc_info.value.line == 4
        assert exc_info.value.column == 6

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse("garbage")


class TestPack:
    """Serializing token streams."""

    def test_canonical_text_packs_identically(self) -> None:
        assert pack(parse(SAMPLE)) == SAMPLE

    def test_empty_entry(self) -> None:
        stream = TokenStream({"A": [], "B": [Other("x")]})
        assert pack(stream) == "[A]\n\n[B]\nx\n"

    def test_argument_quoting(self) -> None:
        stream = TokenStream(
            {"K": [Window("Alear the Divine", ("Hi",)), Alias("", ("a,b", 'q"'))]}
        )
        assert pack(stream) == (
            '[K]\n$Window("Alear the Divine", Hi)$Alias("", "a,b", "q\\"")\n'
        )

    def test_newline_in_argument_stays_on_line(self) -> None:
        stream = TokenStream({"K": [Window("line\n[X]")]})
        packed = pack(stream)
        assert packed == '[K]\n$Window("line\\n[X]")\n'
        assert parse(packed) == stream

    def test_whitespace_is_normalized(self) -> None:
        assert pack(parse("[K]\n$Animation( PID_1 , Wave )\n")) == "[K]\n$Animation(PID_1, Wave)\n"


class TestRoundTrip:
    """parse(pack(t)) == t."""

    def test_constructed_stream(self) -> None:
        stream = TokenStream(
            {
                "A": [
                    Window("Alear the Divine", ("Hi",)),
                    Other("text"),
                    Animation("x"),
                    Alias("", ("a,b",)),
                ],
                "B": [],
                "C": [Other("Hi\n"), Other("$Wait(30)")],
            }
        )
        assert parse(pack(stream)) == stream

    def test_parsed_stream(self) -> None:
        stream = parse(SAMPLE)
        assert parse(pack(stream)) == stream

    def test_trailing_blank_line_in_body(self) -> None:
        source = "[K]\nHi\n\n"
        assert parse(source).entries["K"] == [Other("Hi\n")]
        assert pack(parse(source)) == source

    def test_stream_equality_respects_entry_order(self) -> None:
        assert TokenStream({"a": [], "b": []}) != TokenStream({"b": [], "a": []})
