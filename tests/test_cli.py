# tests/test_cli.py
"""
コマンドラインエントリポイントのテスト。
"""
from pic_core_tracer.cli import main, build_parser


def write_program(path, words):
    buffer = bytearray()
    for word in words:
        buffer += bytes([word & 0xFF, word >> 8])
    path.write_bytes(bytes(buffer))
    return str(path)


def test_parser_defaults():
    args = build_parser().parse_args(["prog.bin"])
    assert args.program == "prog.bin"
    assert args.steps == 10000
    assert args.trace is False
    assert args.config is None


def test_runs_until_sleep(tmp_path, capsys):
    program = write_program(tmp_path / "prog.bin", [0x3042, 0x0063])
    assert main([program]) == 0
    out = capsys.readouterr().out
    assert "CPU halted by SLEEP at 0x0001" in out
    assert "Retired 1 instructions (2 cycles)" in out
    assert "W      0x0042" in out


def test_step_limit(tmp_path, capsys):
    program = write_program(tmp_path / "loop.bin", [0x2800])  # GOTO 0x000
    assert main([program, "--steps", "5"]) == 0
    assert "Retired 5 instructions (10 cycles)" in capsys.readouterr().out


def test_fault_exit_code(tmp_path, capsys):
    program = write_program(tmp_path / "bad.bin", [0x0001])
    assert main([program]) == 1
    assert "Fault:" in capsys.readouterr().err


def test_trace_flag(tmp_path, capsys):
    program = write_program(tmp_path / "prog.bin", [0x3001, 0x0063])
    main([program, "--trace"])
    out = capsys.readouterr().out
    assert "0000: 3001  MOVLW 0x01" in out
    assert "W: 0 -> 1" in out


def test_missing_program(capsys):
    assert main([]) == 1
    assert "no program image" in capsys.readouterr().err


def test_load_error(tmp_path, capsys):
    image = tmp_path / "odd.bin"
    image.write_bytes(bytes([0x00]))
    assert main([str(image)]) == 1
    assert "Error:" in capsys.readouterr().err


def test_config_file(tmp_path, capsys):
    write_program(tmp_path / "prog.bin", [0x0000, 0x0063])
    config = tmp_path / "system.yaml"
    config.write_text("program: prog.bin\ninitial_state:\n  w: 0x33\n")
    assert main(["--config", str(config)]) == 0
    assert "W      0x0033" in capsys.readouterr().out


def test_invalid_config_value(tmp_path, capsys):
    write_program(tmp_path / "prog.bin", [0x0063])
    config = tmp_path / "system.yaml"
    config.write_text("program: prog.bin\ninitial_state:\n  registers:\n    0x90: 1\n")
    assert main(["--config", str(config)]) == 1
    assert "Error:" in capsys.readouterr().err
