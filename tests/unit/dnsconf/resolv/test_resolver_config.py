import pytest

from dnsconf.resolv import (
    GOOGLE_NS,
    LOCAL_NS,
    OPENDNS_NS,
    DomainSuffix,
    NoSearch,
    ResolverConfig,
    SearchList,
    SortEntry,
)
from dnsconf.shared import (
    AddressError,
    InvalidNameError,
    ListTooLargeError,
    ServerUnavailableError,
)


class TestServers:
    def test_set_servers_round_trip(self):
        config = ResolverConfig().set_servers(["8.8.8.8", "8.8.4.4"])

        assert config.get_servers() == ["8.8.8.8", "8.8.4.4"]

    def test_ipv4_listed_before_ipv6(self):
        config = ResolverConfig().set_servers(["::1", "127.0.0.1", "[2001:db8::1]:5353"])

        assert config.get_servers() == ["127.0.0.1", "::1", "[2001:db8::1]:5353"]
        assert [address.family for address in config.ns6] == [6, 6]

    def test_add_server_records_key(self):
        config = ResolverConfig()
        config.add_server("abc123@127.0.0.1:5300")
        config.add_server("10.0.0.1#def456")

        assert config.keys == {
            "abc123@127.0.0.1:5300": "abc123",
            "def456@10.0.0.1": "def456",
        }
        assert config.get_servers() == ["abc123@127.0.0.1:5300", "def456@10.0.0.1"]

        for server in (*config.ns4, *config.ns6):
            assert config.keys[server.hostname] == server.key

    def test_add_server_rejects_non_ip(self):
        config = ResolverConfig()

        with pytest.raises(AddressError):
            config.add_server("ns.example.com")

        assert config.get_servers() == []

    def test_set_servers_is_strict(self):
        config = ResolverConfig()

        with pytest.raises(AddressError):
            config.set_servers(["8.8.8.8", "bogus", "8.8.4.4"])

    def test_clear_servers_drops_keys(self):
        config = ResolverConfig()
        config.add_server("abc@127.0.0.1")
        config.clear_servers()

        assert config.ns4 == []
        assert config.keys == {}

    def test_presets(self):
        config = ResolverConfig()

        assert config.set_local().get_servers() == LOCAL_NS
        assert config.set_opendns().get_servers() == OPENDNS_NS
        assert config.set_google().get_servers() == GOOGLE_NS
        assert config.set_default().get_servers() == GOOGLE_NS


class TestRandomServer:
    def test_ipv4_pick(self):
        config = ResolverConfig().set_servers(["10.0.0.1", "10.0.0.2"])

        for _ in range(10):
            assert config.random_server().host in ("10.0.0.1", "10.0.0.2")

    def test_prefers_ipv6_when_available(self):
        config = ResolverConfig().set_servers(["10.0.0.1", "2001:db8::1"])

        assert config.random_server(prefer_ipv6=True).host == "2001:db8::1"

    def test_falls_back_to_ipv4(self):
        config = ResolverConfig().set_servers(["10.0.0.1"])

        assert config.random_server(prefer_ipv6=True).host == "10.0.0.1"

    def test_ipv6_only_without_preference_is_unavailable(self):
        config = ResolverConfig().set_servers(["2001:db8::1"])

        with pytest.raises(ServerUnavailableError):
            config.random_server(prefer_ipv6=False)

    def test_empty_is_unavailable(self):
        with pytest.raises(ServerUnavailableError):
            ResolverConfig().random_server(prefer_ipv6=True)


class TestSearchPolicy:
    def test_default_is_no_search(self):
        config = ResolverConfig()

        assert config.policy == NoSearch()
        assert config.domain is None
        assert config.search is None

    def test_domain_then_search(self):
        config = ResolverConfig()
        config.set_domain("example.com")
        config.set_search("a.example b.example")

        assert config.domain is None
        assert config.search == ["a.example.", "b.example."]
        assert config.policy == SearchList(("a.example.", "b.example."))

    def test_search_then_domain(self):
        config = ResolverConfig()
        config.set_search("a.example b.example")
        config.set_domain("example.com")

        assert config.search is None
        assert config.domain == "example.com."
        assert config.policy == DomainSuffix("example.com.")

    def test_invalid_domain_raises(self):
        config = ResolverConfig()

        with pytest.raises(InvalidNameError):
            config.set_domain("bad..domain")

    def test_six_names_keep_order(self):
        names = [f"d{index}.example" for index in range(6)]
        config = ResolverConfig().set_search(" ".join(names))

        assert config.search == [f"{name}." for name in names]

    def test_seven_names_raise_and_keep_state(self):
        config = ResolverConfig().set_domain("keep.example")
        names = " ".join(f"d{index}.example" for index in range(7))

        with pytest.raises(ListTooLargeError):
            config.set_search(names)

        assert config.domain == "keep.example."

    def test_invalid_names_are_skipped(self):
        config = ResolverConfig().set_search("a.example bad..name b.example")

        assert config.search == ["a.example.", "b.example."]

    def test_overlong_text_raises(self):
        with pytest.raises(ListTooLargeError):
            ResolverConfig().set_search("a" * 257)


class TestSortList:
    def test_pairs_and_invalid_skipped(self):
        config = ResolverConfig().set_sort(
            "130.155.160.0/255.255.240.0 130.155.0.0 bogus/255.0.0.0 10.0.0.0/bogus"
        )

        assert config.sortlist == [
            SortEntry(ip="130.155.160.0", mask="255.255.240.0"),
            SortEntry(ip="130.155.0.0", mask=None),
        ]

    def test_appends(self):
        config = ResolverConfig()
        config.set_sort("10.0.0.0")
        config.set_sort("192.168.0.0/255.255.0.0")

        assert len(config.sortlist) == 2

    def test_eleventh_entry_raises_and_keeps_state(self):
        config = ResolverConfig()
        config.set_sort(" ".join(f"10.0.{index}.0" for index in range(10)))

        with pytest.raises(ListTooLargeError):
            config.set_sort("192.168.0.0")

        assert len(config.sortlist) == 10
        assert config.sortlist[-1].ip == "10.0.9.0"


class TestStateManagement:
    def test_defaults(self):
        config = ResolverConfig()

        assert config.dots == 1
        assert config.timeout == 5
        assert config.attempts == 2
        assert config.check_names is True
        assert config.tld_query is True
        assert config.rotate is False
        assert config.force_tcp is False

    def test_clone_is_independent(self):
        config = ResolverConfig().set_servers(["10.0.0.1"])
        config.set_search("a.example")
        config.set_sort("10.0.0.0")

        copy = config.clone()
        copy.add_server("key1@10.0.0.2")
        copy.set_domain("other.example")
        copy.set_sort("192.168.0.0")
        copy.parse_options("rotate ndots:4")

        assert config.get_servers() == ["10.0.0.1"]
        assert config.keys == {}
        assert config.search == ["a.example."]
        assert len(config.sortlist) == 1
        assert config.rotate is False
        assert config.dots == 1

        assert copy.get_servers() == ["10.0.0.1", "key1@10.0.0.2"]
        assert copy.domain == "other.example."

    def test_clear_restores_defaults(self):
        config = ResolverConfig().set_servers(["10.0.0.1"])
        config.set_domain("example.com")
        config.set_sort("10.0.0.0")
        config.parse_options("rotate ndots:4 no-tld-query")

        config.clear()

        assert config.get_servers() == []
        assert config.policy == NoSearch()
        assert config.sortlist == []
        assert config.rotate is False
        assert config.dots == 1
        assert config.tld_query is True
