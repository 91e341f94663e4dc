# -*- coding: utf-8 -*-
"""
Tests for the lz77 command line tool
"""

import pytest

import lz77
import lz77cli


def test_compress_string_to_file(tmp_path):
    out_file = tmp_path / "out.lz77"
    assert lz77cli.main(["-s", "abcabcabc", "-o", str(out_file)]) == 0
    assert out_file.read_bytes() == b"\x00a\x00b\x00c\x01\x00\x03\x00\x06"


def test_round_trip_files(tmp_path):
    original_data = "That Sam-I-am, that Sam-I-am, I do not like that Sam-I-am.".encode('utf-8') * 5
    in_file = tmp_path / "input.txt"
    in_file.write_bytes(original_data)
    compressed_file = tmp_path / "compressed.lz77"
    out_file = tmp_path / "output.txt"

    assert lz77cli.main(["-c", "-i", str(in_file), "-o", str(compressed_file)]) == 0
    assert lz77cli.main(["-d", "-i", str(compressed_file), "-o", str(out_file)]) == 0
    assert out_file.read_bytes() == original_data


def test_compress_to_stdout(capsysbinary):
    assert lz77cli.main(["-s", "aaaaaaaaaa"]) == 0
    captured = capsysbinary.readouterr()
    assert captured.out == b"\x00a\x01\x00\x01\x00\x09"


def test_window_and_max_match_options(tmp_path):
    out_file = tmp_path / "out.lz77"
    assert lz77cli.main(["-s", "abcdefgabc", "-w", "4", "-o", str(out_file)]) == 0
    assert out_file.read_bytes() == lz77.encode_tokens([lz77.Literal(b) for b in b"abcdefgabc"])

    assert lz77cli.main(["-s", "zzzzzzzzzz", "-m", "4", "-o", str(out_file)]) == 0
    assert all(t.length <= 4 for t in lz77.decode_tokens(out_file.read_bytes()) if isinstance(t, lz77.Reference))


def test_verbose(tmp_path, capsys):
    out_file = tmp_path / "out.lz77"
    assert lz77cli.main(["-v", "-s", "abcabcabc", "-o", str(out_file)]) == 0
    assert "Compressed size is" in capsys.readouterr().err


def test_missing_input(capsys):
    assert lz77cli.main([]) == 1
    assert "must specify -i or -s" in capsys.readouterr().err


def test_both_inputs(tmp_path, capsys):
    assert lz77cli.main(["-s", "abc", "-i", str(tmp_path / "x")]) == 1
    assert "cannot use both -i and -s" in capsys.readouterr().err


def test_compress_and_decompress_exclusive():
    with pytest.raises(SystemExit) as excinfo:
        lz77cli.main(["-c", "-d", "-s", "abc"])
    assert excinfo.value.code == 1


def test_bad_option_value():
    with pytest.raises(SystemExit) as excinfo:
        lz77cli.main(["-s", "abc", "-w", "big"])
    assert excinfo.value.code == 1


def test_bad_window_size(capsys):
    assert lz77cli.main(["-s", "abc", "-w", "0"]) == 1
    assert "window_size" in capsys.readouterr().err


def test_invalid_compressed_data(tmp_path, capsys):
    in_file = tmp_path / "bad.lz77"
    in_file.write_bytes(b"\x01\x00\x01\x00\x03")
    out_file = tmp_path / "out.txt"
    assert lz77cli.main(["-d", "-i", str(in_file), "-o", str(out_file)]) == 1
    assert "Invalid compressed data" in capsys.readouterr().err
    assert not out_file.exists()


def test_missing_input_file(tmp_path, capsys):
    assert lz77cli.main(["-i", str(tmp_path / "missing.txt")]) == 1
    assert capsys.readouterr().err.startswith("Error: ")


def test_help():
    with pytest.raises(SystemExit) as excinfo:
        lz77cli.main(["-h"])
    assert excinfo.value.code == 0
