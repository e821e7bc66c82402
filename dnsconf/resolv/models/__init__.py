from dnsconf.shared.address import ServerAddress as ServerAddress

from .search_policy import (
    MAX_SEARCH_DOMAINS as MAX_SEARCH_DOMAINS,
    MAX_SEARCH_LENGTH as MAX_SEARCH_LENGTH,
    DomainSuffix as DomainSuffix,
    NoSearch as NoSearch,
    SearchList as SearchList,
    SearchPolicy as SearchPolicy,
)
from .sort_entry import (
    MAX_SORTLIST as MAX_SORTLIST,
    SortEntry as SortEntry,
)
