from .address import (
    DEFAULT_PORT as DEFAULT_PORT,
    ServerAddress as ServerAddress,
    ip_family as ip_family,
    normalize_ip as normalize_ip,
    parse_ip as parse_ip,
    parse_server_address as parse_server_address,
    reverse_name as reverse_name,
)
from .errors import (
    AddressError as AddressError,
    DNSConfigError as DNSConfigError,
    InvalidNameError as InvalidNameError,
    ListTooLargeError as ListTooLargeError,
    ServerUnavailableError as ServerUnavailableError,
)
from .names import (
    fqdn as fqdn,
    is_name as is_name,
    parse_u8 as parse_u8,
    random_item as random_item,
    trim_fqdn as trim_fqdn,
)
from .text import (
    iter_lines as iter_lines,
    normalize_text as normalize_text,
)
from .files import (
    read_text as read_text,
    read_text_async as read_text_async,
)
