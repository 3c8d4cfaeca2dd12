"""IP address and geolocation lookups used when recording a check-in/out.

Both are external services that can fail independently. The IP address is a
required audit field; geolocation is supplementary.
"""
from __future__ import annotations

import ipaddress
import logging
from typing import Any, Mapping, Optional, Protocol

import requests

from ..core.constants import MAX_IP_LENGTH, MAX_LOCATION_ERROR_LENGTH
from ..core.exceptions import GeolocationError, IpLookupError
from .model import Coordinates

logger = logging.getLogger(__name__)


class IpLookup(Protocol):
    def current_ip(self) -> str:
        raise NotImplementedError


class GeolocationProvider(Protocol):
    def current_coordinates(self) -> Optional[Coordinates]:
        """Coordinates, or None when the lookup was skipped.

        Raises GeolocationError with the provider's reason when it fails.
        """

        raise NotImplementedError


def _parse_ip(value: Optional[str]) -> Optional[str]:
    """Normalized address, or None for anything that is not an IPv4/IPv6 address."""
    if not value:
        return None
    value = value.strip()
    if not value or len(value) > MAX_IP_LENGTH:
        return None
    try:
        return str(ipaddress.ip_address(value))
    except ValueError:
        return None


class RequestIpLookup(IpLookup):
    """Client IP of the current request.

    Proxy headers (X-Real-IP, then the first X-Forwarded-For hop) are only
    read when ``trust_proxy_headers`` is set, i.e. behind a known reverse
    proxy; otherwise any client could choose its own audit address.
    """

    def __init__(
        self,
        headers: Mapping[str, str],
        remote_addr: Optional[str],
        *,
        trust_proxy_headers: bool = False,
    ):
        self._headers = headers
        self._remote_addr = remote_addr
        self._trust_proxy_headers = trust_proxy_headers

    def current_ip(self) -> str:
        if self._trust_proxy_headers:
            real_ip = _parse_ip(self._headers.get("X-Real-IP"))
            if real_ip:
                return real_ip

            forwarded = self._headers.get("X-Forwarded-For")
            if forwarded:
                first = _parse_ip(forwarded.split(",")[0])
                if first:
                    return first

        remote = _parse_ip(self._remote_addr)
        if remote:
            return remote
        raise IpLookupError("Could not determine the client IP address")


class PublicIpLookup(IpLookup):
    """Ask an ipify-style service (``{"ip": "..."}``) for the public address."""

    def __init__(self, url: str, *, timeout: float = 5, session: Optional[requests.Session] = None):
        self._url = url
        self._timeout = timeout
        self._http = session or requests

    def current_ip(self) -> str:
        try:
            resp = self._http.get(self._url, timeout=self._timeout)
            resp.raise_for_status()
            ip = resp.json().get("ip")
        except (requests.RequestException, ValueError) as e:
            logger.warning("IP lookup via %s failed: %s", self._url, e)
            raise IpLookupError("Could not fetch IP address") from e

        parsed = _parse_ip(ip if isinstance(ip, str) else None)
        if not parsed:
            raise IpLookupError("IP service returned no valid address")
        return parsed


class SubmittedGeolocation(GeolocationProvider):
    """Geolocation result the browser posted with the scan.

    ``{"latitude": .., "longitude": ..}`` on success, ``{"error": "..."}`` when
    the browser lookup failed; a missing payload means it was skipped.
    """

    def __init__(self, payload: Optional[Mapping[str, Any]]):
        self._payload = payload

    def current_coordinates(self) -> Optional[Coordinates]:
        if not self._payload:
            return None
        if not isinstance(self._payload, Mapping):
            raise GeolocationError("Malformed location data")

        error = self._payload.get("error")
        if error:
            raise GeolocationError(str(error)[:MAX_LOCATION_ERROR_LENGTH])

        try:
            lat = float(self._payload["latitude"])
            lng = float(self._payload["longitude"])
        except (KeyError, TypeError, ValueError) as e:
            raise GeolocationError("Malformed location data") from e

        if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
            raise GeolocationError("Location out of range")
        return Coordinates(latitude=lat, longitude=lng)
