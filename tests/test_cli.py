from texthuff.cli import main
from texthuff.codec import compress_text
from texthuff.container import serialize_artifact


def test_encode_then_decode(tmp_path, capsys):
    src = tmp_path / "story.txt"
    src.write_text("once upon a time, " * 30, encoding="utf-8")

    assert main(["encode", str(src)]) == 0
    huf = tmp_path / "story.huf"
    assert huf.exists()
    assert "saved" in capsys.readouterr().out

    out = tmp_path / "back.txt"
    assert main(["decode", str(huf), "-o", str(out)]) == 0
    assert out.read_bytes() == src.read_bytes()


def test_decode_garbage_fails(tmp_path):
    bad = tmp_path / "bad.huf"
    bad.write_bytes(b"\x00\x00\x00\xff\x00\x00\x00\x01")
    assert main(["decode", str(bad)]) == 1
    assert not (tmp_path / "bad.txt").exists()


def test_encode_empty_file_fails(tmp_path):
    src = tmp_path / "empty.txt"
    src.write_text("")
    assert main(["encode", str(src)]) == 1


def test_missing_file_fails(tmp_path):
    assert main(["encode", str(tmp_path / "nope.txt")]) == 1


def test_decode_artifact_without_huf_suffix(tmp_path):
    src = tmp_path / "archive.bin"
    src.write_bytes(compress_text("hidden text").artifact)

    assert main(["decode", str(src)]) == 0
    restored = tmp_path / "archive.bin.txt"
    assert restored.read_text(encoding="utf-8") == "hidden text"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["archive.bin", "archive.bin.txt"]


def test_encode_huf_named_text_keeps_artifact_suffix(tmp_path):
    src = tmp_path / "odd.huf"
    src.write_text("plain text in a .huf file", encoding="utf-8")
    assert main(["encode", str(src)]) == 0
    assert (tmp_path / "odd.huf.huf").exists()
    assert not (tmp_path / "odd.txt").exists()


def test_failed_decode_writes_no_output(tmp_path):
    src = tmp_path / "s.huf"
    src.write_bytes(serialize_artifact({"\ud800": 1}, 1, b"\x00"))
    assert main(["decode", str(src)]) == 1
    assert not (tmp_path / "s.txt").exists()
