"""
Branch council results dashboard.

Submodules provide sheet loading, row reconciliation, view filtering, edit
submission and user interface rendering helpers that are orchestrated by the
top-level `app.py`.
"""
