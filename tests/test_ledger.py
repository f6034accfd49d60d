from mkvtranscode.ledger import (
    append_to_ledger,
    load_ledger,
    remove_from_ledger,
    save_ledger,
)


def test_append_and_load_ledger(tmp_path):
    path = str(tmp_path / "test_ledger.txt")
    append_to_ledger("test_video", path)
    assert "test_video" in load_ledger(path)

    remove_from_ledger("test_video", path)
    assert "test_video" not in load_ledger(path)


def test_missing_ledger_is_empty(tmp_path):
    assert load_ledger(str(tmp_path / "absent.txt")) == set()


def test_append_twice_loads_once(tmp_path):
    path = tmp_path / "ledger.txt"
    append_to_ledger("a", str(path))
    append_to_ledger("a", str(path))
    append_to_ledger("b", str(path))
    assert path.read_text() == "a\na\nb\n"
    assert load_ledger(str(path)) == {"a", "b"}


def test_save_ledger_round_trip(tmp_path):
    path = str(tmp_path / "ledger.txt")
    append_to_ledger("old", path)
    save_ledger({"x", "y", "z"}, path)
    assert load_ledger(path) == {"x", "y", "z"}


def test_remove_absent_entry_leaves_file_untouched(tmp_path):
    path = tmp_path / "ledger.txt"
    path.write_text("b\na\na\n")
    remove_from_ledger("missing", str(path))
    assert path.read_text() == "b\na\na\n"


def test_load_strips_crlf_and_skips_bad_utf8(tmp_path):
    path = tmp_path / "ledger.txt"
    path.write_bytes(b"one\r\n\xff\xfe\ntwo")
    assert load_ledger(str(path)) == {"one", "two"}


def test_append_to_unwritable_location_is_ignored(tmp_path):
    path = str(tmp_path / "no_such_dir" / "ledger.txt")
    append_to_ledger("entry", path)
    assert load_ledger(path) == set()