"""Tests for the urwarden command line."""

import json
import logging

import pytest

from urwarden.cli import EXIT_INPUT, EXIT_INTERNAL, EXIT_OK, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("URWARDEN_BLOCKLIST_PATH", "URWARDEN_MALICIOUS_THRESHOLD", "URWARDEN_SUSPICIOUS_THRESHOLD"):
        monkeypatch.delenv(key, raising=False)
    # main() reconfigures the root logger; put the test runner's handlers back
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def json_lines(text):
    return [json.loads(line) for line in text.splitlines() if line.strip()]


class TestCLI:

    def test_version(self, capsys):
        assert main(["--version"]) == EXIT_OK
        assert capsys.readouterr().out.startswith("urwarden ")

    def test_single_url(self, capsys, blocklist_file):
        code = main(["--blocklist", str(blocklist_file), "https://bad.example.com/login"])
        assert code == EXIT_OK
        records = json_lines(capsys.readouterr().out)
        assert len(records) == 1
        assert records[0]["score"] == 80
        assert records[0]["label"] == "malicious"

    def test_multiple_urls_in_order(self, capsys, blocklist_file):
        urls = ["https://foo.shop/", "https://www.malicious.test/", "https://foo.shop/"]
        assert main(["--blocklist", str(blocklist_file), *urls]) == EXIT_OK
        records = json_lines(capsys.readouterr().out)
        # duplicates are removed
        assert [r["input_url"] for r in records] == ["https://foo.shop/", "https://www.malicious.test/"]
        assert records[1]["reasons"][0]["detail"] == "matched subdomain of malicious.test"

    def test_input_error_continues_and_exits_2(self, capsys, blocklist_file):
        code = main(["--blocklist", str(blocklist_file), "ftp://example.com", "https://foo.shop/"])
        assert code == EXIT_INPUT
        captured = capsys.readouterr()
        assert len(json_lines(captured.out)) == 1
        assert "ftp://example.com" in captured.err
        assert "invalid scheme" in captured.err

    def test_input_file(self, capsys, tmp_path, blocklist_file):
        urls = tmp_path / "urls.txt"
        urls.write_text("# batch\nhttps://bad.example.com/\nhttps://example.org/\n", encoding="utf-8")
        code = main(["--blocklist", str(blocklist_file), "--input", str(urls), "--workers", "2"])
        assert code == EXIT_OK
        assert len(json_lines(capsys.readouterr().out)) == 2

    def test_missing_input_file(self, capsys, tmp_path):
        assert main(["--input", str(tmp_path / "missing.txt")]) == EXIT_INPUT

    def test_no_urls_prints_usage(self, capsys):
        assert main([]) == EXIT_INPUT
        assert "usage" in capsys.readouterr().err.lower()

    def test_missing_blocklist_is_ok(self, capsys, tmp_path):
        code = main(["--blocklist", str(tmp_path / "none.txt"), "https://bad.example.com/"])
        assert code == EXIT_OK
        assert json_lines(capsys.readouterr().out)[0]["label"] == "benign"

    def test_unreadable_blocklist_is_internal_error(self, capsys, tmp_path):
        code = main(["--blocklist", str(tmp_path), "https://example.com/"])
        assert code == EXIT_INTERNAL

    def test_invalid_thresholds_is_internal_error(self, capsys, monkeypatch):
        monkeypatch.setenv("URWARDEN_MALICIOUS_THRESHOLD", "10")
        assert main(["https://example.com/"]) == EXIT_INTERNAL
