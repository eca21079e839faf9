"""
Shared helpers: layout defaults, page-size presets, unit conversion and
page range parsing. Nothing here holds state.
"""
