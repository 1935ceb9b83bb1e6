"""Core domain package for sessionscope.

Core holds search highlighting and statistics aggregation as pure functions
over typed records, with no file, terminal or UI code, so any frontend can
call it per row or per refresh.
"""
