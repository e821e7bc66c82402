import sys

import pytest

from dnsconf.env import Env
from dnsconf.resolv import GOOGLE_NS, ResolverConfig


class TestReadEnv:
    def test_applies_env_model(self):
        config = ResolverConfig().set_servers(["10.0.0.1"])
        config.set_search("a.example")

        config.read_env(Env(LOCALDOMAIN="test.", RES_OPTIONS="ndots:4 rotate"))

        assert config.domain == "test."
        assert config.search is None
        assert config.dots == 4
        assert config.rotate is True
        assert config.get_servers() == ["10.0.0.1"]

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LOCALDOMAIN", "Env.Example")
        monkeypatch.setenv("RES_OPTIONS", "attempts:3")

        config = ResolverConfig().read_env()

        assert config.domain == "env.example."
        assert config.attempts == 3

    def test_unset_environment_changes_nothing(self):
        config = ResolverConfig().set_domain("keep.example")
        config.read_env()

        assert config.domain == "keep.example."
        assert config.dots == 1

    def test_invalid_localdomain_is_ignored(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LOCALDOMAIN", "bad..domain")

        config = ResolverConfig().set_domain("keep.example")
        config.read_env()

        assert config.domain == "keep.example."


class TestFileLoaders:
    def test_from_file(self, resolv_file: str):
        config = ResolverConfig.load_file(resolv_file)

        assert config.get_servers() == ["10.0.0.1", "2001:db8::53"]

    def test_from_file_propagates_errors(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ResolverConfig.load_file(str(tmp_path / "missing"))

    @pytest.mark.asyncio
    async def test_from_file_async(self, resolv_file: str):
        config = await ResolverConfig.load_file_async(resolv_file)

        assert config.search == ["corp.example.com.", "example.com."]

    @pytest.mark.asyncio
    async def test_from_file_async_propagates_errors(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await ResolverConfig.load_file_async(str(tmp_path / "missing"))


class TestSystemLoaders:
    def test_system_path(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(sys, "platform", "linux")
        assert ResolverConfig().get_system() == "/etc/resolv.conf"

        monkeypatch.setattr(sys, "platform", "win32")
        assert ResolverConfig().get_system() is None

    def test_from_system_reads_file_then_env(self, monkeypatch: pytest.MonkeyPatch, resolv_file: str):
        monkeypatch.setattr(ResolverConfig, "get_system", lambda self: resolv_file)
        monkeypatch.setenv("RES_OPTIONS", "use-vc ndots:5")

        config = ResolverConfig.load_system()

        assert config.get_servers() == ["10.0.0.1", "2001:db8::53"]
        assert config.force_tcp is True
        assert config.dots == 5
        assert config.rotate is True

    def test_missing_file_falls_back_then_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path):
        missing = str(tmp_path / "missing")
        monkeypatch.setattr(ResolverConfig, "get_system", lambda self: missing)
        monkeypatch.setenv("LOCALDOMAIN", "test.")

        config = ResolverConfig.load_system()

        assert config.get_servers() == GOOGLE_NS
        assert config.domain == "test."

    def test_no_system_path_falls_back(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(sys, "platform", "win32")

        config = ResolverConfig().set_servers(["10.0.0.1"])
        config.parse_options("rotate")
        config.from_system(Env(RES_OPTIONS="edns0"))

        assert config.get_servers() == GOOGLE_NS
        assert config.rotate is False
        assert config.edns is True

    def test_undecodable_bytes_keep_valid_lines(self, monkeypatch: pytest.MonkeyPatch, tmp_path):
        path = tmp_path / "resolv.conf"
        path.write_bytes(b"# caf\xe9\nnameserver 10.0.0.1\n\xff\xfe\noptions rotate\n")
        monkeypatch.setattr(ResolverConfig, "get_system", lambda self: str(path))

        config = ResolverConfig.load_system()

        assert config.get_servers() == ["10.0.0.1"]
        assert config.rotate is True

    @pytest.mark.asyncio
    async def test_async_missing_file_falls_back_then_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path):
        missing = str(tmp_path / "missing")
        monkeypatch.setattr(ResolverConfig, "get_system", lambda self: missing)

        config = await ResolverConfig.load_system_async(Env(LOCALDOMAIN="test."))

        assert config.get_servers() == GOOGLE_NS
        assert config.domain == "test."

    @pytest.mark.asyncio
    async def test_async_reads_file(self, monkeypatch: pytest.MonkeyPatch, resolv_file: str):
        monkeypatch.setattr(ResolverConfig, "get_system", lambda self: resolv_file)

        config = await ResolverConfig.load_system_async()

        assert config.get_servers() == ["10.0.0.1", "2001:db8::53"]
