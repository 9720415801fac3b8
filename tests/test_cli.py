"""Command-line tests for ulacc."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

import pytest
import ulacc


PROGRAM = """inicio
X = 15
Y = 0
W = umL
W = nA
fim.
"""


@pytest.fixture(autouse=True)
def restore_logging():
    """ulacc.main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers = handlers
    root.setLevel(level)
    logging.disable(logging.NOTSET)


@pytest.fixture
def program(tmp_path):
    path = tmp_path / "testeula.ula"
    path.write_text(PROGRAM, encoding="utf-8")
    return path


class TestOutputPath:

    def test_default_output_path(self):
        assert ulacc.default_output_path("dados/testeula.ula") == os.path.join("dados", "testeula.hex")
        assert ulacc.default_output_path("prog") == "prog.hex"

    def test_writes_next_to_input(self, program):
        assert ulacc.main([str(program), "-q"]) == 0
        assert program.with_suffix(".hex").read_text(encoding="utf-8") == "F00\nF06\n"

    def test_explicit_output(self, program, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        target = out / "result.hex"
        assert ulacc.main([str(program), "-o", str(target), "-q"]) == 0
        assert target.read_text(encoding="utf-8") == "F00\nF06\n"

    def test_stdout(self, program, capsys):
        assert ulacc.main([str(program), "-o", "-", "-q"]) == 0
        assert capsys.readouterr().out == "F00\nF06\n"

    def test_listing_to_stdout(self, program, capsys):
        assert ulacc.main([str(program), "-o", "-", "--format", "listing", "-q"]) == 0
        out = capsys.readouterr().out
        assert "F00" in out and "F06" in out
        assert "umL" in out


class TestErrors:

    def test_missing_input(self, tmp_path, capsys):
        missing = tmp_path / "nope.ula"
        assert ulacc.main([str(missing), "-q"]) == 1
        err = capsys.readouterr().err
        assert "Cannot open input file" in err
        assert str(missing) in err

    def test_unwritable_output(self, program, tmp_path, capsys):
        target = tmp_path / "no_such_dir" / "x.hex"
        assert ulacc.main([str(program), "-o", str(target), "-q"]) == 1
        err = capsys.readouterr().err
        assert "Cannot open output file" in err
        assert str(target) in err

    def test_default_output_would_overwrite_input(self, tmp_path, capsys):
        src = tmp_path / "prog.hex"
        src.write_text("X = 1\nY = 2\nW = AeB\nfim.\n", encoding="utf-8")
        assert ulacc.main([str(src), "-q"]) == 1
        assert "same file as the input" in capsys.readouterr().err
        assert src.read_text(encoding="utf-8") == "X = 1\nY = 2\nW = AeB\nfim.\n"

    def test_explicit_output_is_input(self, program, capsys):
        assert ulacc.main([str(program), "-o", str(program), "-q"]) == 1
        assert "Cannot open output file" in capsys.readouterr().err
        assert program.read_text(encoding="utf-8") == PROGRAM

    def test_strict_rejects_unknown_mnemonic(self, tmp_path, capsys):
        src = tmp_path / "bad.ula"
        src.write_text("X = 2\nY = 5\nW = foo\nfim.\n", encoding="utf-8")
        assert ulacc.main([str(src), "--strict", "-q"]) == 1
        assert "Line 3" in capsys.readouterr().err

    def test_permissive_accepts_unknown_mnemonic(self, tmp_path):
        src = tmp_path / "bad.ula"
        src.write_text("X = 2\nY = 5\nW = foo\nfim.\n", encoding="utf-8")
        assert ulacc.main([str(src), "-q"]) == 0
        assert src.with_suffix(".hex").read_text(encoding="utf-8") == "25\n"

    def test_bad_dialect_choice(self, program):
        with pytest.raises(SystemExit) as exc:
            ulacc.main([str(program), "--dialect", "fr"])
        assert exc.value.code == 2


class TestLogging:

    def test_log_file(self, program, tmp_path):
        log = tmp_path / "logs" / "ulacc.log"
        assert ulacc.main([str(program), "-q", "--log-file", str(log)]) == 0
        text = log.read_text(encoding="utf-8")
        assert "W = nA -> F06" in text
        assert "Assembled 2 instruction(s)" in text

    def test_no_log(self, program):
        assert ulacc.main([str(program), "--no-log"]) == 0
        assert program.with_suffix(".hex").exists()

    def test_dialect_option(self, tmp_path):
        src = tmp_path / "en.ula"
        src.write_text("start\nX = 1\nY = 2\nW = AeB\nend.\nW = AoB\n", encoding="utf-8")
        assert ulacc.main([str(src), "--dialect", "en", "-q"]) == 0
        assert src.with_suffix(".hex").read_text(encoding="utf-8") == "12B\n"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
