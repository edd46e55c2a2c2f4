"""Generators that write into an existing project tree."""
