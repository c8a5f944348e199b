"""HTTP-facing helpers that sit outside the path grammar."""
