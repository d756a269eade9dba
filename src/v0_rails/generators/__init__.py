"""
Artifact Generators.

Pure functions from an ``IR`` (plus options) to the text of one output file.
"""
