"""Routing: pattern grammar, path matching and URL generation.

Patterns are compiled once when routes are declared; matching and
generation only read the compiled form.
"""
