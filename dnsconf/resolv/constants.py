LOCAL_NS = [
    "127.0.0.1",
    "::1",
]

OPENDNS_NS = [
    "208.67.222.222",
    "208.67.220.220",
    "208.67.222.220",
    "208.67.220.222",
    "2620:0:ccc::2",
    "2620:0:ccd::2",
]

GOOGLE_NS = [
    "8.8.8.8",
    "8.8.4.4",
    "2001:4860:4860::8888",
    "2001:4860:4860::8844",
]

RESOLV_CONF_PATH = "/etc/resolv.conf"

# Option ceilings
MAX_NDOTS = 15
MAX_TIMEOUT = 30
MAX_ATTEMPTS = 5

DEFAULT_NDOTS = 1
DEFAULT_TIMEOUT = 5
DEFAULT_ATTEMPTS = 2
