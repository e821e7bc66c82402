from .constants import (
    GOOGLE_NS as GOOGLE_NS,
    LOCAL_NS as LOCAL_NS,
    OPENDNS_NS as OPENDNS_NS,
)
from .models import (
    DomainSuffix as DomainSuffix,
    NoSearch as NoSearch,
    SearchList as SearchList,
    SearchPolicy as SearchPolicy,
    ServerAddress as ServerAddress,
    SortEntry as SortEntry,
)
from .resolver_config import ResolverConfig as ResolverConfig
