"""
Plant lookup infrastructure: provider clients for every upstream API.
"""
