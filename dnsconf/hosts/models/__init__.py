from .host_entry import HostEntry as HostEntry
