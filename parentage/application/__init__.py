"""
Application layer: interfaces for external collaborators.
"""
