"""
domain - Pure types and boundaries of the wellness chat tracker.

Contains value objects (drafts), entities, ports and exceptions.
Never imports from application/, infrastructure/ or adapters/.
"""
