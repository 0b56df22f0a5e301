"""Compact JWS parsing and JWK key handling."""
