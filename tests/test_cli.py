import io
from unittest.mock import AsyncMock

import httpx
import pytest
import respx
import structlog

from glm_plan_usage.__main__ import main, parse_args, read_input
from glm_plan_usage.providers.glm import GlmProvider

QUOTA_LIMIT_URL = "https://open.bigmodel.cn/api/monitor/usage/quota/limit"


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def stdin(monkeypatch):
    def _set(text: str) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(text))

    return _set


def test_parse_args():
    args = parse_args(["--verbose", "--no-cache", "--config", "c.toml"])
    assert args.verbose
    assert args.no_cache
    assert not args.init
    assert args.config == "c.toml"


def test_read_input_falls_back_on_invalid_json():
    assert read_input("not json").model is None
    assert read_input('{"model": {"id": "glm-4.6"}}').model.id == "glm-4.6"


@pytest.mark.asyncio
async def test_init_writes_config(tmp_path, capsys):
    path = tmp_path / "glm" / "config.toml"

    assert await main(["--init", "--config", str(path)]) == 0

    assert path.exists()
    assert "Initialized config at" in capsys.readouterr().err


@pytest.mark.asyncio
@respx.mock
async def test_prints_status_line(tmp_path, glm_env, stdin, capsys, sample_quota_response, monkeypatch):
    monkeypatch.setattr(GlmProvider, "_backoff", AsyncMock())
    respx.get(QUOTA_LIMIT_URL).mock(
        return_value=httpx.Response(200, json=sample_quota_response)
    )
    stdin('{"model": {"id": "glm-4.6"}}')

    assert await main(["--config", str(tmp_path / "missing.toml")]) == 0

    out = capsys.readouterr().out
    assert "🪙 25%" in out
    assert "🌐 92/100" in out
    # 92% tool usage
    assert out.startswith("\x1b[38;5;226m")
    assert not out.endswith("\n")


@pytest.mark.asyncio
async def test_prints_nothing_without_credentials(tmp_path, stdin, capsys, monkeypatch):
    monkeypatch.delenv("ANTHROPIC_AUTH_TOKEN", raising=False)
    stdin("")

    assert await main(["--config", str(tmp_path / "missing.toml")]) == 0

    assert capsys.readouterr().out == ""


@pytest.mark.asyncio
async def test_invalid_config_falls_back_to_defaults(tmp_path, stdin, capsys, monkeypatch):
    monkeypatch.delenv("ANTHROPIC_AUTH_TOKEN", raising=False)
    path = tmp_path / "config.toml"
    path.write_text("not = [valid", encoding="utf-8")
    stdin("{}")

    assert await main(["--config", str(path)]) == 0
    assert capsys.readouterr().out == ""


class BrokenStdin:
    def read(self) -> str:
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")


@pytest.mark.asyncio
async def test_undecodable_stdin_prints_nothing(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", BrokenStdin())

    assert await main(["--config", str(tmp_path / "missing.toml")]) == 0
    assert capsys.readouterr().out == ""
