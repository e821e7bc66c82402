from .hosts_db import (
    HOSTS_TTL as HOSTS_TTL,
    HostsDB as HostsDB,
)
from .models import HostEntry as HostEntry
