# =============================================================================
# test_lexer.py - Line Source and Tokenizer Tests
# =============================================================================
# Tests for line cleaning, command classification, field extraction and
# the rewindable line source.
# =============================================================================

import io

import pytest

from hack_asm.assembler.lexer import (
    Command,
    CommandType,
    LineSource,
    Tokenizer,
    classify,
    is_decimal,
    strip_line,
)
from hack_asm.errors import (
    AssemblerError,
    AssemblySyntaxError,
    CommandTypeError,
    SourceLocation,
)


def tokenize(source: str) -> list[Command]:
    """Helper to get all commands from source text."""
    return list(Tokenizer(LineSource.from_string(source)))


def command(text: str) -> Command:
    """Helper to build a single classified command."""
    return Command(text, classify(text), SourceLocation("<test>", 1))


class _Pipe(io.StringIO):
    """A text stream that cannot seek, like a pipe."""

    def seekable(self) -> bool:
        return False


# =============================================================================
# Line Cleaning Tests
# =============================================================================

class TestStripLine:
    """Test comment and whitespace removal."""

    def test_comment_removed(self):
        assert strip_line("@2 // load two") == "@2"

    def test_comment_only_line(self):
        assert strip_line("// just a comment") == ""

    def test_blank_line(self):
        assert strip_line("   \t  ") == ""

    def test_inner_whitespace_removed(self):
        assert strip_line("  D = M ; JGT  ") == "D=M;JGT"

    def test_first_comment_marker_wins(self):
        assert strip_line("M=1 // a // b") == "M=1"

    def test_single_slash_kept(self):
        assert strip_line("D=A /x") == "D=A/x"


class TestClassify:
    """Test command classification by first character."""

    def test_address(self):
        assert classify("@21") == CommandType.ADDRESS
        assert classify("@LOOP") == CommandType.ADDRESS

    def test_label(self):
        assert classify("(LOOP)") == CommandType.LABEL

    def test_computation(self):
        assert classify("D=M") == CommandType.COMPUTATION
        assert classify("0;JMP") == CommandType.COMPUTATION

    def test_is_decimal(self):
        assert is_decimal("0")
        assert is_decimal("32767")
        assert not is_decimal("R1")
        assert not is_decimal("1x")
        assert not is_decimal("")


# =============================================================================
# Field Extraction Tests
# =============================================================================

class TestCommandFields:
    """Test symbol/dest/comp/jump extraction."""

    def test_address_symbol(self):
        assert command("@100").symbol == "100"
        assert command("@sum").symbol == "sum"

    def test_label_symbol(self):
        assert command("(END_LOOP)").symbol == "END_LOOP"

    def test_dest_comp_jump(self):
        cmd = command("AM=M+1;JNE")
        assert cmd.dest == "AM"
        assert cmd.comp == "M+1"
        assert cmd.jump == "JNE"

    def test_dest_comp(self):
        cmd = command("D=D+A")
        assert cmd.dest == "D"
        assert cmd.comp == "D+A"
        assert cmd.jump is None

    def test_comp_jump(self):
        cmd = command("D;JGT")
        assert cmd.dest is None
        assert cmd.comp == "D"
        assert cmd.jump == "JGT"

    def test_comp_only(self):
        cmd = command("M")
        assert cmd.dest is None
        assert cmd.comp == "M"
        assert cmd.jump is None

    def test_dest_on_address_is_contract_error(self):
        with pytest.raises(CommandTypeError):
            command("@5").dest

    def test_comp_on_label_is_contract_error(self):
        with pytest.raises(CommandTypeError):
            command("(X)").comp

    def test_jump_on_address_is_contract_error(self):
        with pytest.raises(CommandTypeError):
            command("@5").jump

    def test_symbol_on_computation_is_contract_error(self):
        with pytest.raises(CommandTypeError) as exc_info:
            command("D=M").symbol
        assert exc_info.value.field == "symbol"

    def test_contract_error_is_type_error(self):
        with pytest.raises(TypeError):
            command("0;JMP").symbol


# =============================================================================
# Tokenizer Tests
# =============================================================================

class TestTokenizer:
    """Test iteration over commands."""

    def test_blank_and_comment_lines_skipped(self):
        commands = tokenize("""
            // Adds 2 and 3

            @2
            D=A   // D = 2
        """)
        assert [c.text for c in commands] == ["@2", "D=A"]

    def test_types_in_order(self):
        commands = tokenize("(LOOP)\n@LOOP\n0;JMP\n")
        assert [c.type for c in commands] == [
            CommandType.LABEL,
            CommandType.ADDRESS,
            CommandType.COMPUTATION,
        ]

    def test_location_tracks_physical_lines(self):
        commands = tokenize("// header\n\n   @7\n")
        assert commands[0].location == SourceLocation("<input>", 3, 4)
        assert commands[0].source_line == "@7"

    def test_has_more_commands_and_advance(self):
        tokenizer = Tokenizer(LineSource.from_string("@1\n\n// x\nD=A\n"))
        assert tokenizer.current is None
        assert tokenizer.has_more_commands()
        assert tokenizer.advance().text == "@1"
        assert tokenizer.current.text == "@1"
        assert tokenizer.has_more_commands()
        assert tokenizer.has_more_commands()  # idempotent
        assert tokenizer.advance().text == "D=A"
        assert not tokenizer.has_more_commands()

    def test_advance_past_end(self):
        tokenizer = Tokenizer(LineSource.from_string("// nothing\n"))
        with pytest.raises(EOFError):
            tokenizer.advance()

    def test_empty_source(self):
        assert tokenize("") == []

    def test_missing_address(self):
        with pytest.raises(AssemblySyntaxError):
            tokenize("@\n")

    def test_unterminated_label(self):
        with pytest.raises(AssemblySyntaxError) as exc_info:
            tokenize("\n(LOOP\n")
        assert exc_info.value.location.line == 2

    def test_empty_label(self):
        with pytest.raises(AssemblySyntaxError):
            tokenize("()\n")

    def test_missing_computation(self):
        with pytest.raises(AssemblySyntaxError):
            tokenize("D=;JMP\n")


# =============================================================================
# Line Source Tests
# =============================================================================

class TestLineSource:
    """Test rewinding and content digests."""

    def test_rewind_string_source(self):
        source = LineSource.from_string("@1\nD=A\n")
        first = list(source)
        source.rewind()
        assert list(source) == first == [(1, "@1"), (2, "D=A")]

    def test_digest_stable_across_traversals(self):
        source = LineSource.from_string("@1\nD=A\n")
        list(source)
        first = source.digest
        source.rewind()
        list(source)
        assert first is not None
        assert source.digest == first

    def test_digest_differs_for_different_content(self):
        a = LineSource.from_string("@1\n")
        b = LineSource.from_string("@2\n")
        list(a)
        list(b)
        assert a.digest != b.digest

    def test_line_endings_ignored_in_digest(self):
        a = LineSource.from_string("@1\r\nD=A\r\n")
        b = LineSource.from_string("@1\nD=A\n")
        list(a)
        list(b)
        assert a.digest == b.digest

    def test_from_path(self, tmp_path):
        path = tmp_path / "Prog.asm"
        path.write_text("@5\nM=1\n")
        with LineSource.from_path(path) as source:
            assert source.filename == str(path)
            assert [line for _, line in source] == ["@5", "M=1"]
            source.rewind()
            assert [line for _, line in source] == ["@5", "M=1"]

    def test_non_seekable_without_path(self):
        source = LineSource(_Pipe("@1\n"))
        list(source)
        with pytest.raises(AssemblerError):
            source.rewind()

    def test_non_seekable_with_path_reopens(self, tmp_path):
        path = tmp_path / "Prog.asm"
        path.write_text("@1\nD=A\n")
        source = LineSource(_Pipe(path.read_text()), filename="pipe", path=path)
        first = list(source)
        source.rewind()
        assert list(source) == first
        source.close()
