# --------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the options used to send registry requests through a proxy server"""

import urllib.parse
import socks

# proxy type -> (socks library constant, proxy URL scheme)
_proxy_types = {
    "HTTP": (socks.HTTP, "http"),
    "SOCKS4": (socks.SOCKS4, "socks4"),
    "SOCKS5": (socks.SOCKS5, "socks5"),
}


def _get_proxy_type_name(proxy_type):
    if proxy_type in _proxy_types:
        return proxy_type
    # The socks library constants are accepted as well
    for name, (socks_constant, _) in _proxy_types.items():
        if proxy_type == socks_constant:
            return name
    raise ValueError("Invalid proxy type: {}".format(proxy_type))


class ProxyOptions(object):
    """
    Options for sending the HTTP requests of the registry client through a proxy server.
    """

    def __init__(
        self, proxy_type, proxy_addr, proxy_port, proxy_username=None, proxy_password=None
    ):
        """
        :param proxy_type: The type of the proxy server: "HTTP", "SOCKS4" or "SOCKS5", or the
            matching constant of the socks library.
        :param str proxy_addr: IP address or DNS name of the proxy server
        :param int proxy_port: The port of the proxy server
        :param str proxy_username: Username for the proxy server (optional). Requests are sent
            without proxy authentication if it is not provided.
        :param str proxy_password: Password for the username (optional)

        :raises: ValueError if the proxy type is not supported
        """
        self._proxy_type = _get_proxy_type_name(proxy_type)
        self._proxy_addr = proxy_addr
        self._proxy_port = int(proxy_port)
        self._proxy_username = proxy_username
        self._proxy_password = proxy_password

    @property
    def proxy_type(self):
        return self._proxy_type

    @property
    def proxy_type_socks(self):
        return _proxy_types[self._proxy_type][0]

    @property
    def proxy_address(self):
        return self._proxy_addr

    @property
    def proxy_port(self):
        return self._proxy_port

    @property
    def proxy_username(self):
        return self._proxy_username

    @property
    def proxy_password(self):
        return self._proxy_password

    @property
    def proxy_url(self):
        """The URL of the proxy server, including credentials when both are set"""
        netloc = "{}:{}".format(self._proxy_addr, self._proxy_port)
        if self._proxy_username and self._proxy_password:
            credentials = ":".join(
                urllib.parse.quote(value, safe="")
                for value in (self._proxy_username, self._proxy_password)
            )
            netloc = credentials + "@" + netloc
        return "{}://{}".format(_proxy_types[self._proxy_type][1], netloc)
