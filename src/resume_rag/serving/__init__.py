"""
Serving — HTTP search API backing the chat UI.
"""
