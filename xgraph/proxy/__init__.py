"""Proxy rotation."""

from xgraph.proxy.rotating import ProxyProvider

__all__ = ["ProxyProvider"]
