"""Tests for the command line interface."""

import json
import pytest
from passkey_crawler import cli
from passkey_crawler.modules.models import Verdict


POSITIVES = {"https://www.github.com", "https://gitlab.com"}


class StubAnalyzer:

    configs = []

    def __init__(self, config):
        StubAnalyzer.configs.append(config)

    def detect(self, url):
        if url in POSITIVES:
            return Verdict(url=url, has_passkey=True, method="passkey keywords", title=url, found_at_url=url)
        return Verdict(url=url, has_passkey=False)


@pytest.fixture(autouse=True)
def stub_analyzer(monkeypatch):
    StubAnalyzer.configs = []
    monkeypatch.setattr(cli, "PasskeyAnalyzer", StubAnalyzer)


class TestCli:

    def test_detect_prints_verdict(self, capsys):
        assert cli.main(["detect", "--url", "https://www.github.com"]) == 0
        verdict = json.loads(capsys.readouterr().out)
        assert verdict["hasPasskey"] is True
        assert verdict["foundAtUrl"] == "https://www.github.com"

    def test_detect_writes_output_file(self, tmp_path):
        out = tmp_path / "verdict.json"
        cli.main(["detect", "--url", "https://www.example.org", "--output", str(out)])
        assert json.loads(out.read_text())["hasPasskey"] is False

    def test_headed_flag(self):
        cli.main(["--headed", "detect", "--url", "https://www.example.org"])
        assert StubAnalyzer.configs[0]["browser_config"]["headless"] is False

    def test_crawl(self, capsys):
        cli.main(["crawl", "--query", "github"])
        records = json.loads(capsys.readouterr().out)
        assert [r["title"] for r in records] == ["https://www.github.com"]

    def test_batch(self, tmp_path, capsys):
        sites = tmp_path / "sites.txt"
        sites.write_text("github.com\n\ngitlab.com\nexample.org\n")
        out = tmp_path / "result.txt"
        report = tmp_path / "result.json"
        assert cli.main(["batch", "--sites", str(sites), "--out", str(out), "--json", str(report)]) == 0

        text = out.read_text(encoding="utf-8")
        assert "Total Sites Tested: 3" in text
        assert "Total URLs Tested: 5" in text
        assert "✓ Sites with Passkey Support: 2" in text
        assert "Success Rate: 66.7%" in text
        assert "2. https://gitlab.com" in text
        d = json.loads(report.read_text())
        assert d["totals"] == {"tested": 3, "withPasskey": 2, "withoutPasskey": 1}
        assert d["urlTotals"] == {"tested": 5, "withPasskey": 2, "withoutPasskey": 3}
        assert "SUMMARY" in capsys.readouterr().out

    def test_config_file_is_merged(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"detection_config": {"test_email": "probe@example.org"}}))
        cli.main(["--config", str(config), "detect", "--url", "https://www.example.org"])
        merged = StubAnalyzer.configs[0]
        assert merged["detection_config"]["test_email"] == "probe@example.org"
        assert merged["detection_config"]["sleep_after_fill"] == 1
