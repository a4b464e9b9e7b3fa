"""
Utility helpers.

Import directly from the submodules; this package stays empty to keep the
errors -> utils -> errors import chain acyclic.
"""
