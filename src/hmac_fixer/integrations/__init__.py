"""Adaptadores para hosts que interceptam requisições (requests, mitmproxy)."""
