"""
jsonpinpoint configuration helpers.
"""
