"""Derive module graphs from Python source trees."""
