# 📄 File: plantscope/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as a Python package containing common tools
# that every part of PlantScope can use, like settings, errors and logging.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package initialization for configuration, the exception taxonomy,
# structured logging and the generic external API client.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - All application modules importing shared utilities

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management
- Exception hierarchy with HTTP status codes
- Logging and request context utilities
- Async HTTP client for external providers
"""

__all__ = []
