"""
Senali Infrastructure Layer

Persistence, LLM access, authentication and monitoring adapters.
"""
