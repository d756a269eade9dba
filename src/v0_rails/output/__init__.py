"""
Artifact path derivation and file persistence.
"""
