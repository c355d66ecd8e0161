# backend/utils/client.py
import ipaddress
from fastapi import Request

from config import settings

UNKNOWN_IP = "0.0.0.0"

# Addresses reported as "Local Network"; everything else is unknown
LOCAL_NETWORKS = [
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("fc00::/7"),
]

# Resolve the caller's address, preferring the proxy-supplied one
def get_client_ip(request: Request) -> str:
    if settings.TRUST_PROXY:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            first = forwarded.split(",")[0].strip()
            if first:
                return first
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_IP

# Coarse location label; no external geolocation lookup is performed
def get_location_from_ip(ip: str) -> str:
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return "Unknown Location"
    if addr.is_loopback or any(addr in net for net in LOCAL_NETWORKS):
        return "Local Network"
    return "Unknown Location"

def get_user_agent(request: Request) -> str:
    return request.headers.get("user-agent", "")
