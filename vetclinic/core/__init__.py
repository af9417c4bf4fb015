"""
Cross-cutting utilities: security primitives, mail delivery and middleware.
"""
