"""
Infrastructure services shared across pipeline stages.
"""
