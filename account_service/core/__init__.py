"""
Configuration, persistence, security primitives and the error taxonomy.
"""
