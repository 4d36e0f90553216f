"""
Domain layer: slot entities, weak identity storage and the relationship index.
Pure logic; the only collaborator is the IReclaimer passed in.
"""
