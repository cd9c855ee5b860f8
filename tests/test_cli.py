# =============================================================================
# test_cli.py - hackasm Command-Line Tests
# =============================================================================

from click.testing import CliRunner

from hack_asm.cli.errors import ExitCode
from hack_asm.cli.hackasm import main


ADD_ASM = "@2\nD=A\n@3\nD=D+A\n@0\nM=D\n"


class TestHackasmCLI:
    """Tests for the hackasm CLI tool."""

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Assemble Hack assembly" in result.output

    def test_cli_version(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_basic_assembly(self, tmp_path):
        source = tmp_path / "Add.asm"
        source.write_text(ADD_ASM)
        output = tmp_path / "Add.hack"

        runner = CliRunner()
        result = runner.invoke(main, [str(source), str(output)])

        assert result.exit_code == 0
        assert output.read_text().splitlines() == [
            "0000000000000010",
            "1110110000010000",
            "0000000000000011",
            "1110000010010000",
            "0000000000000000",
            "1110001100001000",
        ]

    def test_too_few_arguments_prints_usage(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "only.asm")])
        assert result.exit_code == 0
        assert "Usage:" in result.output

    def test_too_many_arguments_prints_usage(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["a.asm", "b.hack", "c"])
        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert not (tmp_path / "b.hack").exists()

    def test_missing_input(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "missing.asm"), str(tmp_path / "out.hack")])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert not (tmp_path / "out.hack").exists()

    def test_duplicate_label_fails_without_output(self, tmp_path):
        source = tmp_path / "Dup.asm"
        source.write_text("(FOO)\n@1\n(FOO)\n")
        output = tmp_path / "Dup.hack"

        runner = CliRunner()
        result = runner.invoke(main, [str(source), str(output)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "duplicate label 'FOO'" in result.output
        assert not output.exists()

    def test_permissive_flag(self, tmp_path):
        source = tmp_path / "Odd.asm"
        source.write_text("D=A+D\n")
        output = tmp_path / "Odd.hack"
        runner = CliRunner()

        strict = runner.invoke(main, [str(source), str(output)])
        assert strict.exit_code == ExitCode.BUILD_ERROR

        permissive = runner.invoke(main, ["--permissive", str(source), str(output)])
        assert permissive.exit_code == 0
        assert output.read_text() == "1110000000010000\n"

    def test_symbols_and_listing(self, tmp_path):
        source = tmp_path / "Loop.asm"
        source.write_text("(LOOP)\n@i\nM=M+1\n@LOOP\n0;JMP\n")
        output = tmp_path / "Loop.hack"
        symbols = tmp_path / "Loop.sym"
        listing = tmp_path / "Loop.lst"

        runner = CliRunner()
        result = runner.invoke(main, [
            str(source), str(output), "-s", str(symbols), "-l", str(listing),
        ])

        assert result.exit_code == 0
        assert "LOOP 0\n" in symbols.read_text()
        assert "i 16\n" in symbols.read_text()
        assert "M=M+1" in listing.read_text()

    def test_verbose(self, tmp_path):
        source = tmp_path / "Add.asm"
        source.write_text(ADD_ASM)
        runner = CliRunner()
        result = runner.invoke(main, ["-v", str(source), str(tmp_path / "Add.hack")])
        assert result.exit_code == 0
        assert "Wrote 6 instructions" in result.output
