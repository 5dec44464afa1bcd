"""
Version 1 of the Field Operations API.

Routes follow the dashboard's contract: one path per resource
with the record id passed as the ``id`` query parameter, plus a few
action paths (``/{id}/complete``, ``/{id}/duplicate`` ...).
"""
