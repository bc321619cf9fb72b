"""
Shared infrastructure package.
Contains the generic client used to talk to external HTTP APIs.
"""
