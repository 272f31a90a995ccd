"""
KV Gateway

HTTP access to a TTL-bounded key-value store.
"""
