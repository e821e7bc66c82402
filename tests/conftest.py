"""
Pytest configuration for dnsconf tests.

Async tests use pytest-asyncio via ``@pytest.mark.asyncio``.
"""

import pytest

from dnsconf.logging import LoggingConfig


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


@pytest.fixture(autouse=True)
def configure_log_level():
    config = LoggingConfig()
    config.update(log_level="debug")
    yield
    config.update(log_level="error", log_output="stderr")


@pytest.fixture(autouse=True)
def clean_resolver_env(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "LOCALDOMAIN",
        "RES_OPTIONS",
        "SystemRoot",
        "DNSCONF_LOG_LEVEL",
        "DNSCONF_LOG_OUTPUT",
        "DNSCONF_LOGS_DIRECTORY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def hosts_text() -> str:
    return (
        "# static hosts\n"
        "127.0.0.1 localhost\n"
        "::1 localhost ip6-localhost ip6-loopback\n"
        "10.0.0.5 web.example.com\n"
    )


@pytest.fixture
def hosts_file(tmp_path, hosts_text: str) -> str:
    path = tmp_path / "hosts"
    path.write_text(hosts_text, encoding="utf-8")
    return str(path)


@pytest.fixture
def resolv_text() -> str:
    return (
        "# generated\n"
        "nameserver 10.0.0.1\n"
        "nameserver 2001:db8::53\n"
        "search corp.example.com example.com\n"
        "options ndots:2 rotate\n"
    )


@pytest.fixture
def resolv_file(tmp_path, resolv_text: str) -> str:
    path = tmp_path / "resolv.conf"
    path.write_text(resolv_text, encoding="utf-8")
    return str(path)
