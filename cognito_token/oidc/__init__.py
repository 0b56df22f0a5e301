"""Token acquisition, key-set retrieval and verification."""
