"""
Snippetbox — Configuration Tests
=================================

What:  Settings validation, listen-address parsing, CLI overrides,
       the uvicorn launch options and the startup log line.
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest

from snippetbox.__main__ import build_parser, main
from snippetbox.config import Settings, apply_overrides, parse_addr, settings


class TestSettings:
    def test_log_level_normalised(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValueError, match="Invalid log_level"):
            Settings(log_level="chatty")

    def test_env_database_url(self):
        # conftest points the suite at SQLite
        assert Settings().is_sqlite

    def test_tls_disabled_without_files(self, tmp_path):
        config = Settings(
            tls_cert_file=str(tmp_path / "cert.pem"),
            tls_key_file=str(tmp_path / "key.pem"),
        )
        assert config.tls_enabled is False

    def test_tls_enabled_with_files(self, tmp_path):
        (tmp_path / "cert.pem").write_text("cert")
        (tmp_path / "key.pem").write_text("key")
        config = Settings(
            tls_cert_file=str(tmp_path / "cert.pem"),
            tls_key_file=str(tmp_path / "key.pem"),
        )
        assert config.tls_enabled is True


class TestAddr:
    def test_port_only(self):
        assert parse_addr(":4000") == ("0.0.0.0", 4000)

    def test_ipv6_brackets_stripped(self):
        assert parse_addr("[::1]:4000") == ("::1", 4000)

    def test_host_and_port(self):
        assert parse_addr("127.0.0.1:8080") == ("127.0.0.1", 8080)

    @pytest.mark.parametrize("addr", ["4000", "localhost:", "host:abc"])
    def test_invalid(self, addr):
        with pytest.raises(ValueError):
            parse_addr(addr)


class TestOverrides:
    def test_cli_flags_override_settings(self):
        args = build_parser().parse_args(
            ["--addr", ":9000", "--static-dir", "/srv/static", "--dsn", "sqlite+aiosqlite:///x.db"]
        )
        config = apply_overrides(
            Settings(), addr=args.addr, static_dir=args.static_dir, dsn=args.dsn
        )
        assert config.port == 9000
        assert config.static_dir == "/srv/static"
        assert config.database_url == "sqlite+aiosqlite:///x.db"

    def test_no_flags_keep_settings(self):
        config = Settings(port=4000)
        apply_overrides(config)
        assert config.port == 4000


class TestMain:
    @pytest.fixture
    def tls_files(self, tmp_path, monkeypatch):
        cert = tmp_path / "cert.pem"
        key = tmp_path / "key.pem"
        cert.write_text("cert")
        key.write_text("key")
        monkeypatch.setattr(settings, "tls_cert_file", str(cert))
        monkeypatch.setattr(settings, "tls_key_file", str(key))
        return cert, key

    @pytest.fixture
    def no_tls(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "tls_cert_file", str(tmp_path / "missing-cert.pem"))
        monkeypatch.setattr(settings, "tls_key_file", str(tmp_path / "missing-key.pem"))

    def test_tls_restricts_ciphers(self, tls_files):
        cert, key = tls_files
        with patch("snippetbox.__main__.uvicorn.run") as run:
            assert main([]) == 0

        options = run.call_args.kwargs
        assert options["ssl_certfile"] == str(cert)
        assert options["ssl_keyfile"] == str(key)
        assert options["ssl_ciphers"] == "ECDHE+AESGCM:ECDHE+CHACHA20"
        assert options["timeout_keep_alive"] == 60

    def test_plain_http_without_tls_files(self, no_tls):
        with patch("snippetbox.__main__.uvicorn.run") as run:
            assert main([]) == 0

        args, options = run.call_args
        assert args == ("snippetbox.main:app",)
        assert options["host"] == settings.host
        assert options["port"] == settings.port
        assert "ssl_certfile" not in options
        assert "ssl_ciphers" not in options

    def test_invalid_addr_exits_without_serving(self, no_tls, capsys):
        with patch("snippetbox.__main__.uvicorn.run") as run:
            assert main(["--addr", "nowhere"]) == 2

        run.assert_not_called()
        assert "Invalid address" in capsys.readouterr().err


class TestLifespan:
    @pytest.mark.asyncio
    async def test_startup_logs_configured_address(self, caplog):
        from snippetbox.main import create_app, lifespan

        config = Settings(host="127.0.0.1", port=9123, log_level="info")
        app = create_app(config)

        with patch("snippetbox.main.setup_logging") as setup_logging, patch(
            "snippetbox.main.dispose_engine", AsyncMock()
        ) as dispose_engine:
            with caplog.at_level(logging.INFO, logger="snippetbox.main"):
                async with lifespan(app):
                    pass

        setup_logging.assert_called_once_with("INFO")
        dispose_engine.assert_awaited_once()
        assert "Starting server on http://127.0.0.1:9123" in caplog.text
