"""
Core logic for Signet: field geometry, pointer interaction, documents and signing.
"""
