"""
Core: configuration, exceptions and the vector store gateway.
"""
