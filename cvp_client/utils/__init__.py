"""
Utility functions for URL building and query encoding.
"""

from cvp_client.utils.url import encode_query, endpoint_url, request_path

__all__ = ["encode_query", "endpoint_url", "request_path"]
