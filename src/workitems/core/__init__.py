"""Core domain: contracts, store, persistence, projection and commands."""
